import asyncio
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from service.holiday.models import HolidayRecord
from service.holiday.service import HolidayService
from service.holiday.store import FileHolidayStore


def off(date: str, name: str) -> HolidayRecord:
    return HolidayRecord(date=date, name=name, isOffDay=True, kind="public_holiday")


def makeup(date: str, name: str = "补班") -> HolidayRecord:
    return HolidayRecord(date=date, name=name, isOffDay=False, kind="makeup_workday")


# 2024 春节：2/10 ~ 2/17 放假，2/4（周日）、2/18（周日）补班
CN_2024 = [
    makeup("2024-02-04", "春节前补班"),
    *[off(f"2024-02-{d:02d}", "春节") for d in range(10, 18)],
    makeup("2024-02-18", "春节后补班"),
    off("2024-01-01", "元旦"),
]


class FakeHolidayClient:
    """记录调用次数的数据源替身"""

    def __init__(self, data: Optional[Dict[Tuple[str, int], List[HolidayRecord]]] = None, delay: float = 0.0):
        self.data = data or {}
        self.delay = delay
        self.calls: List[Tuple[str, int]] = []
        self.closed = False

    async def fetch(self, country: str, year: int) -> List[HolidayRecord]:
        self.calls.append((country, year))
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.data.get((country, year), []))

    async def aclose(self):
        self.closed = True


class ExplodingClient:
    async def fetch(self, country: str, year: int):
        raise AssertionError(f"unexpected fetch for {country}-{year}")

    async def aclose(self):
        pass


@pytest.fixture
def cache_dir(tmp_path):
    return str(tmp_path / "cache" / "holidays")


@pytest.fixture
def fake_client():
    return FakeHolidayClient({("CN", 2024): CN_2024})


@pytest.fixture
def make_service(cache_dir) -> Callable[..., HolidayService]:
    def _make(client=None) -> HolidayService:
        return HolidayService(client=client or FakeHolidayClient(), store=FileHolidayStore(cache_dir))
    return _make


@pytest.fixture
def holiday_service(make_service, fake_client) -> HolidayService:
    return make_service(fake_client)
