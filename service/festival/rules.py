"""
节日规则解析：规则 + 年份 -> 公历日期。

纯函数，无状态无 I/O。规则在该年不存在时返回 None（不是错误）。
"""
from datetime import date as dt, timedelta
from typing import Optional

from service.calendar.date_utils import days_in_month, lunar_to_solar, solar_term_on, weekday_sunday_first
from .models import ComputedRule, FestivalRule, FixedRule, LunarRule, NthWeekdayRule

QINGMING = "清明"


def resolve(rule: FestivalRule, year: int) -> Optional[dt]:
    if isinstance(rule, FixedRule):
        return resolve_fixed(rule, year)
    if isinstance(rule, LunarRule):
        return resolve_lunar(rule, year)
    if isinstance(rule, NthWeekdayRule):
        return nth_weekday(year, rule.month, rule.weekday, rule.n)
    if isinstance(rule, ComputedRule):
        return resolve_computed(rule, year)
    raise TypeError(f"Unknown festival rule: {rule!r}")


def resolve_fixed(rule: FixedRule, year: int) -> Optional[dt]:
    try:
        return dt(year, rule.month, rule.day)
    except ValueError:
        # 2 月 29 日之类在平年不存在
        return None


def resolve_lunar(rule: LunarRule, year: int) -> Optional[dt]:
    solar = lunar_to_solar(year, rule.lunar_month, rule.lunar_day)
    if solar is not None:
        return solar
    # 腊月小月没有三十，除夕落在廿九；其他农历节日不做替换
    if rule.year_end:
        return lunar_to_solar(year, rule.lunar_month, 29)
    return None


def nth_weekday(year: int, month: int, weekday: int, n: int) -> Optional[dt]:
    """weekday 取 0 = 周日 ... 6 = 周六；n = -1 表示当月最后一个"""
    last_day = days_in_month(year, month)
    if n == -1:
        for d in range(last_day, 0, -1):
            day = dt(year, month, d)
            if weekday_sunday_first(day) == weekday:
                return day
        return None

    count = 0
    for d in range(1, last_day + 1):
        day = dt(year, month, d)
        if weekday_sunday_first(day) == weekday:
            count += 1
            if count == n:
                return day
    return None


def easter_sunday(year: int) -> dt:
    """Anonymous Gregorian algorithm (Meeus/Jones/Butcher)"""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return dt(year, month, day)


def qingming(year: int) -> dt:
    for d in range(3, 7):
        day = dt(year, 4, d)
        if solar_term_on(day) == QINGMING:
            return day
    return dt(year, 4, 5)


def resolve_computed(rule: ComputedRule, year: int) -> Optional[dt]:
    if rule.algorithm == "easter":
        return easter_sunday(year) + timedelta(days=rule.offset)
    if rule.algorithm == "qingming":
        return qingming(year)
    return None
