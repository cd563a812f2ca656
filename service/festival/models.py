from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

Region = Literal["CN", "HK", "US"]
FestivalType = Literal["lunar_festival", "solar_festival", "solar_term", "public_holiday"]


class FixedRule(BaseModel):
    """每年同一个公历月日"""
    type: Literal["fixed"] = "fixed"
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)


class LunarRule(BaseModel):
    """农历固定月日，year 按农历年解释"""
    type: Literal["lunar"] = "lunar"
    lunar_month: int = Field(..., ge=1, le=12)
    lunar_day: int = Field(..., ge=1, le=30)
    year_end: bool = False  # 只有除夕置 True：腊月无三十时退到廿九


class NthWeekdayRule(BaseModel):
    """某月第 n 个星期 w，n = -1 表示最后一个"""
    type: Literal["nth_weekday"] = "nth_weekday"
    month: int = Field(..., ge=1, le=12)
    weekday: int = Field(..., ge=0, le=6)  # 0 = 周日 ... 6 = 周六
    n: int

    @field_validator("n")
    @classmethod
    def _check_n(cls, v: int) -> int:
        if v != -1 and not 1 <= v <= 5:
            raise ValueError(f"n must be 1..5 or -1, got {v}")
        return v


class ComputedRule(BaseModel):
    """按算法推算的日期，offset 仅对 easter 有意义（相对复活节的天数）"""
    type: Literal["computed"] = "computed"
    algorithm: Literal["easter", "qingming"]
    offset: int = 0


FestivalRule = Annotated[
    Union[FixedRule, LunarRule, NthWeekdayRule, ComputedRule],
    Field(discriminator="type"),
]


class Festival(BaseModel):
    name: str
    name_zh: Optional[str] = None
    region: Region
    rule: FestivalRule

    @property
    def category(self) -> FestivalType:
        return "lunar_festival" if isinstance(self.rule, LunarRule) else "solar_festival"


class ResolvedFestival(BaseModel):
    name: str
    name_zh: Optional[str] = None
    region: Region
    date: str  # YYYY-MM-DD
    category: FestivalType


class FestivalEntry(BaseModel):
    date: str
    lunar_date: Optional[str] = None
    festivals: List[str] = Field(default_factory=list)
    solar_term: Optional[str] = None
    is_public_holiday: Optional[bool] = None
    holiday_name: Optional[str] = None

    def has_content(self) -> bool:
        return bool(self.festivals) or self.solar_term is not None or self.is_public_holiday is not None


class FestivalLookup(BaseModel):
    festival: str
    year: int
    found: bool
    date: Optional[str] = None
    region: Optional[Region] = None
