from datetime import datetime
from typing import Any, Dict, List, Optional

from infra.errors import InvalidInputError
from service.business.service import BusinessDayService
from service.calendar.date_utils import get_timezone
from service.festival.service import FestivalService
from service.holiday.service import HolidayService, normalize_country, validate_year
from .manager import ToolManager
from .models import Tool


class CalendarTools:
    """把节假日相关服务包装成可调用工具"""

    def __init__(self, holiday_svc: HolidayService, business_svc: BusinessDayService, festival_svc: FestivalService):
        self.holiday_svc = holiday_svc
        self.business_svc = business_svc
        self.festival_svc = festival_svc

    def register_all(self, manager: ToolManager) -> ToolManager:
        manager.register(Tool(
            name="calculate_business_days",
            description="Count business days between two dates ([from, to)) or add/subtract business days "
                        "from a date. Skips weekends and, when a country is given, public holidays; "
                        "make-up workdays count as business days.",
            parameters={
                "type": "object",
                "properties": {
                    "action": {"type": "string", "enum": ["count", "add"]},
                    "from": {"type": "string", "description": "Start date, YYYY-MM-DD"},
                    "to": {"type": "string", "description": "End date (exclusive), required for count"},
                    "business_days": {"type": "integer", "description": "Required for add, negative to subtract"},
                    "country": {"type": "string", "description": "ISO country code, e.g. CN, US"},
                    "timezone": {"type": "string", "description": "IANA timezone, defaults to UTC"},
                },
                "required": ["action", "from"],
            },
            func=self.calculate_business_days,
        ))
        manager.register(Tool(
            name="get_festivals",
            description="List festivals, solar terms and public holidays within a date range (inclusive).",
            parameters={
                "type": "object",
                "properties": {
                    "start_date": {"type": "string"},
                    "end_date": {"type": "string"},
                    "country": {"type": "string", "description": "Defaults to CN"},
                    "types": {
                        "type": "array",
                        "items": {"type": "string",
                                  "enum": ["lunar_festival", "solar_festival", "solar_term", "public_holiday"]},
                    },
                },
                "required": ["start_date", "end_date"],
            },
            func=self.get_festivals,
        ))
        manager.register(Tool(
            name="resolve_festival",
            description="Resolve a named festival (e.g. 春节, Thanksgiving, Easter Monday) to its date in a year.",
            parameters={
                "type": "object",
                "properties": {
                    "festival": {"type": "string"},
                    "year": {"type": "integer", "description": "Defaults to the current year"},
                    "region": {"type": "string", "enum": ["CN", "HK", "US"]},
                },
                "required": ["festival"],
            },
            func=self.resolve_festival,
        ))
        manager.register(Tool(
            name="get_public_holidays",
            description="Get the public holidays and make-up workdays of a country for one year.",
            parameters={
                "type": "object",
                "properties": {
                    "country": {"type": "string"},
                    "year": {"type": "integer"},
                },
                "required": ["country", "year"],
            },
            func=self.get_public_holidays,
        ))
        return manager

    async def calculate_business_days(
        self,
        action: str,
        business_days: Optional[int] = None,
        to: Optional[str] = None,
        country: Optional[str] = None,
        timezone: Optional[str] = None,
        **kwargs,
    ) -> Dict[str, Any]:
        # "from" 是关键字，只能从 kwargs 里取
        from_date = kwargs.pop("from", None)
        if kwargs:
            raise InvalidInputError(f"Unexpected parameters: {sorted(kwargs)}")
        if not from_date:
            raise InvalidInputError("'from' date is required")

        if action == "count":
            if not to:
                raise InvalidInputError("'to' date is required for count action")
            result = await self.business_svc.count_business_days(from_date, to, country, timezone)
        elif action == "add":
            if business_days is None:
                raise InvalidInputError("'business_days' is required for add action")
            result = await self.business_svc.add_business_days(from_date, business_days, country, timezone)
        else:
            raise InvalidInputError(f"Unknown action: {action}", {"action": action})
        return result.model_dump()

    async def get_festivals(
        self,
        start_date: str,
        end_date: str,
        country: Optional[str] = None,
        types: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        entries = await self.festival_svc.get_festivals(start_date, end_date, country or "CN", types)
        return {
            "count": len(entries),
            "entries": [e.model_dump(exclude_none=True) for e in entries],
        }

    def resolve_festival(self, festival: str, year: Optional[int] = None, region: Optional[str] = None) -> Dict[str, Any]:
        if year is None:
            year = datetime.now(tz=get_timezone()).year
        return self.festival_svc.resolve_festival(festival, year, region).model_dump()

    async def get_public_holidays(self, country: str, year: int) -> Dict[str, Any]:
        country = normalize_country(country)
        year = validate_year(year)
        holiday_set = await self.holiday_svc.get_holidays(country, year)
        return {
            "country": country,
            "year": year,
            "count": len(holiday_set),
            "holidays": [r.model_dump() for r in holiday_set.to_list()],
        }
