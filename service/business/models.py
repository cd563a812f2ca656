from typing import List, Optional

from pydantic import BaseModel, Field


class DayStatus(BaseModel):
    date: str
    is_business: bool
    reason: Optional[str] = None


class ExcludedDay(BaseModel):
    date: str
    reason: str


class BusinessDayCount(BaseModel):
    from_date: str
    to_date: str
    country: Optional[str] = None
    business_days: int
    calendar_days: int  # [from, to) 的自然日数
    excluded_days: int
    excluded: List[ExcludedDay] = Field(default_factory=list)  # 最多 EXCLUDED_LIMIT 条


class BusinessDayShift(BaseModel):
    from_date: str
    country: Optional[str] = None
    business_days_added: int
    result: str
    weekday: str
    excluded_days: int
    excluded: List[ExcludedDay] = Field(default_factory=list)
