from datetime import date as dt, timedelta
from typing import List, Mapping, Optional

from infra.errors import InvalidInputError
from infra.logger import logger
from service.calendar.date_utils import get_timezone, is_weekend, iter_days, parse_date, weekday_name
from service.holiday.models import HolidayRecord
from service.holiday.service import HolidayService, normalize_country
from .models import BusinessDayCount, BusinessDayShift, DayStatus, ExcludedDay

EXCLUDED_LIMIT = 50  # 返回的排除日期列表上限
BUSINESS_DAYS_PER_EXTRA_YEAR = 200  # add 预加载：每 200 个工作日多加载一年


class BusinessDayService:
    def __init__(self, holiday_service: HolidayService):
        self.holidays = holiday_service

    @staticmethod
    def classify(day: dt, holidays: Optional[Mapping[str, HolidayRecord]] = None) -> DayStatus:
        """
        判断顺序不能调换：
        1. 有节假日记录：调休补班 -> 工作日；放假 -> 非工作日
        2. 周六日 -> 非工作日
        3. 其余 -> 工作日
        """
        key = day.isoformat()
        record = holidays.get(key) if holidays else None
        if record is not None:
            if record.kind == "makeup_workday":
                return DayStatus(date=key, is_business=True)
            if record.isOffDay:
                return DayStatus(date=key, is_business=False, reason=record.name or "holiday")

        if is_weekend(day):
            return DayStatus(date=key, is_business=False, reason="weekend")

        return DayStatus(date=key, is_business=True)

    async def is_business_day(self, date: str, country: Optional[str] = None, timezone: Optional[str] = None) -> DayStatus:
        day = parse_date(date, get_timezone(timezone), "date")
        holidays = await self._preload(country, day.year, day.year)
        return self.classify(day, holidays)

    async def count_business_days(
        self,
        from_date: str,
        to_date: str,
        country: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> BusinessDayCount:
        """统计 [from, to) 内的工作日，不含 to 当天"""
        tz = get_timezone(timezone)
        start = parse_date(from_date, tz, "from")
        end = parse_date(to_date, tz, "to")
        if end < start:
            raise InvalidInputError(
                f"'to' ({end.isoformat()}) must not be earlier than 'from' ({start.isoformat()})",
                {"from": from_date, "to": to_date},
            )

        country = normalize_country(country) if country else None
        holidays = await self._preload(country, start.year, end.year)

        count = 0
        excluded_count = 0
        excluded: List[ExcludedDay] = []
        for day in iter_days(start, end):
            status = self.classify(day, holidays)
            if status.is_business:
                count += 1
                continue
            excluded_count += 1
            if len(excluded) < EXCLUDED_LIMIT:
                excluded.append(ExcludedDay(date=status.date, reason=status.reason or "non-business"))

        return BusinessDayCount(
            from_date=start.isoformat(),
            to_date=end.isoformat(),
            country=country,
            business_days=count,
            calendar_days=(end - start).days,
            excluded_days=excluded_count,
            excluded=excluded,
        )

    async def add_business_days(
        self,
        from_date: str,
        business_days: int,
        country: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> BusinessDayShift:
        """从 from 起按方向逐日走 n 个工作日，from 当天不计入"""
        if isinstance(business_days, bool) or not isinstance(business_days, int):
            raise InvalidInputError(f"Invalid business_days: {business_days!r}", {"business_days": business_days})

        start = parse_date(from_date, get_timezone(timezone), "from")
        country = normalize_country(country) if country else None

        direction = 1 if business_days >= 0 else -1
        remaining = abs(business_days)
        extra_years = 1 + remaining // BUSINESS_DAYS_PER_EXTRA_YEAR
        if direction > 0:
            holidays = await self._preload(country, start.year, start.year + extra_years)
        else:
            holidays = await self._preload(country, start.year - extra_years, start.year)

        current = start
        excluded_count = 0
        excluded: List[ExcludedDay] = []
        step = timedelta(days=direction)
        while remaining > 0:
            try:
                current += step
            except OverflowError:
                raise InvalidInputError(
                    f"Result is out of the supported date range after {current.isoformat()}",
                    {"from": from_date, "business_days": business_days},
                )
            status = self.classify(current, holidays)
            if status.is_business:
                remaining -= 1
            else:
                excluded_count += 1
                if len(excluded) < EXCLUDED_LIMIT:
                    excluded.append(ExcludedDay(date=status.date, reason=status.reason or "non-business"))

        return BusinessDayShift(
            from_date=start.isoformat(),
            country=country,
            business_days_added=business_days,
            result=current.isoformat(),
            weekday=weekday_name(current),
            excluded_days=excluded_count,
            excluded=excluded,
        )

    async def _preload(self, country: Optional[str], start_year: int, end_year: int) -> Optional[Mapping[str, HolidayRecord]]:
        if not country:
            return None
        start_year = max(start_year, dt.min.year)
        end_year = min(end_year, dt.max.year)
        logger.debug("BusinessDay", f"预加载 {country} {start_year}~{end_year} 节假日")
        return await self.holidays.get_holidays_for_years(country, start_year, end_year)
