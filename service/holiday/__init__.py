from .service import HolidayService, normalize_country
from .client import HolidayClient
from .store import FileHolidayStore, MemoryHolidayStore
from .models import HolidayRecord, HolidaySet

__all__ = [
    'HolidayService',
    'HolidayClient',
    'FileHolidayStore',
    'MemoryHolidayStore',
    'HolidayRecord',
    'HolidaySet',
    'normalize_country',
]
