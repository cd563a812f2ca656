import calendar
from datetime import date as dt, datetime, time, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chinese_calendar import get_solar_terms
from zhdate import ZhDate

from infra.config.settings import settings
from infra.errors import InvalidInputError

# zhdate 与 chinese_calendar 的数据表都只覆盖 1900 ~ 2100
SUPPORTED_YEARS = range(1900, 2101)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def get_timezone(name: Optional[str] = None) -> ZoneInfo:
    tz_name = name or settings.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidInputError(f"Invalid timezone: {tz_name}", {"timezone": tz_name})


def parse_date(value: str, tz: Optional[ZoneInfo] = None, field: str = "date") -> dt:
    """
    解析 YYYY-MM-DD 或完整 ISO 8601 时间为日历日期。
    带偏移量的时间先换算到 tz 再取日期。
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Invalid {field}: empty value", {field: value})
    text = value.strip()
    try:
        if len(text) == 10:
            return dt.fromisoformat(text)
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidInputError(f"Invalid {field}: {e}", {field: value})
    if parsed.tzinfo is not None and tz is not None:
        parsed = parsed.astimezone(tz)
    return parsed.date()


def is_weekend(date: dt) -> bool:
    return date.weekday() >= 5


def weekday_sunday_first(date: dt) -> int:
    """0 = 周日 ... 6 = 周六"""
    return (date.weekday() + 1) % 7


def weekday_name(date: dt) -> str:
    return WEEKDAY_NAMES[date.weekday()]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_days(start: dt, end: dt) -> Iterator[dt]:
    """半开区间 [start, end) 内逐日迭代"""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def lunar_to_solar(lunar_year: int, lunar_month: int, lunar_day: int) -> Optional[dt]:
    """农历日期转公历，日期不存在（如小月三十）时返回 None"""
    if lunar_year not in SUPPORTED_YEARS:
        return None
    try:
        lunar = ZhDate(lunar_year, lunar_month, lunar_day)
    except (TypeError, ValueError):
        return None
    return lunar.to_datetime().date()


def lunar_label(date: dt) -> Optional[str]:
    """农历月日，如“正月初一”“闰四月十五”"""
    if date.year not in SUPPORTED_YEARS:
        return None
    try:
        lunar = ZhDate.from_datetime(datetime.combine(date, time.min))
    except (TypeError, ValueError):
        return None
    # chinese() 形如 "二零二四年正月初一 甲辰年 (龙年)"，只取月日
    return lunar.chinese().split(" ", 1)[0].split("年", 1)[1]


def solar_term_on(date: dt) -> Optional[str]:
    """当天的节气名（如“清明”），不是节气日返回 None"""
    if date.year not in SUPPORTED_YEARS:
        return None
    terms = get_solar_terms(date, date)
    if terms:
        return terms[0][1]
    return None
