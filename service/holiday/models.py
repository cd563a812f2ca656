from datetime import date as dt
from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HolidayKind = Literal["public_holiday", "makeup_workday", "regular"]


class HolidayRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD
    name: str = ""
    isOffDay: bool
    kind: HolidayKind

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v: str) -> str:
        return dt.fromisoformat(v.strip()).isoformat()


class HolidaySet(BaseModel):
    """某个 (国家, 年份) 的全部节假日记录，按 ISO 日期索引"""
    model_config = ConfigDict(frozen=True)

    country: str
    year: int
    records: Dict[str, HolidayRecord] = Field(default_factory=dict)

    @classmethod
    def from_records(cls, country: str, year: int, records: Iterable[HolidayRecord]) -> "HolidaySet":
        # 同一天出现多次时以最后一条为准
        return cls(country=country, year=year, records={r.date: r for r in records})

    def get(self, day: dt | str) -> Optional[HolidayRecord]:
        key = day if isinstance(day, str) else day.isoformat()
        return self.records.get(key)

    def to_list(self) -> List[HolidayRecord]:
        return sorted(self.records.values(), key=lambda r: r.date)

    def __contains__(self, day: object) -> bool:
        if isinstance(day, dt):
            day = day.isoformat()
        return day in self.records

    def __len__(self) -> int:
        return len(self.records)

