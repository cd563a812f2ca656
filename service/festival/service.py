from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from infra.errors import InvalidInputError
from infra.logger import logger
from service.calendar.date_utils import lunar_label, parse_date, solar_term_on
from service.holiday.models import HolidayRecord
from service.holiday.service import HolidayService, normalize_country, validate_year
from .data import FESTIVALS_BY_REGION
from .models import Festival, FestivalEntry, FestivalLookup, ResolvedFestival
from .rules import resolve

FESTIVAL_TYPES: Tuple[str, ...] = ("lunar_festival", "solar_festival", "solar_term", "public_holiday")
SEARCH_ORDER = ("CN", "HK", "US")


class FestivalService:
    def __init__(self, holiday_service: Optional[HolidayService] = None):
        self.holidays = holiday_service

    @staticmethod
    def find_festival(name: str, region: Optional[str] = None) -> Optional[Festival]:
        """按英文名（不区分大小写）或中文名查找，默认按 CN -> HK -> US 的顺序"""
        needle = name.strip()
        regions = (region.upper(),) if region else SEARCH_ORDER
        for r in regions:
            for festival in FESTIVALS_BY_REGION.get(r, ()):
                if festival.name.lower() == needle.lower() or festival.name_zh == needle:
                    return festival
        return None

    def resolve_festival(self, name: str, year: int, region: Optional[str] = None) -> FestivalLookup:
        year = validate_year(year)
        festival = self.find_festival(name, region)
        if festival is None:
            return FestivalLookup(festival=name, year=year, found=False)
        day = resolve(festival.rule, year)
        if day is None:
            logger.debug("Festival", f"{festival.name} 在 {year} 年不存在")
            return FestivalLookup(festival=festival.name, year=year, found=False, region=festival.region)
        return FestivalLookup(
            festival=festival.name,
            year=year,
            found=True,
            date=day.isoformat(),
            region=festival.region,
        )

    @staticmethod
    def list_festivals(region: str, year: int) -> List[ResolvedFestival]:
        year = validate_year(year)
        region = region.upper()
        if region not in FESTIVALS_BY_REGION:
            raise InvalidInputError(f"Unsupported festival region: {region}", {"region": region})
        results: List[ResolvedFestival] = []
        for festival in FESTIVALS_BY_REGION[region]:
            day = resolve(festival.rule, year)
            if day is None:
                continue
            results.append(ResolvedFestival(
                name=festival.name,
                name_zh=festival.name_zh,
                region=festival.region,
                date=day.isoformat(),
                category=festival.category,
            ))
        results.sort(key=lambda f: f.date)
        return results

    async def get_festivals(
        self,
        start_date: str,
        end_date: str,
        country: str = "CN",
        types: Optional[Iterable[str]] = None,
    ) -> List[FestivalEntry]:
        """
        列出 [start, end]（含两端）内的节日、节气和法定节假日，只返回有内容的日期。
        """
        start = parse_date(start_date, field="start_date")
        end = parse_date(end_date, field="end_date")
        if end < start:
            raise InvalidInputError("end_date must not be earlier than start_date",
                                    {"start_date": start_date, "end_date": end_date})
        country = normalize_country(country)
        wanted = self._check_types(types)

        by_date: Dict[str, List[str]] = {}
        festival_types = {"lunar_festival", "solar_festival"} & wanted
        if festival_types:
            # 农历年晚于公历年开始，往前多算一年
            for year in range(max(start.year - 1, 1), end.year + 1):
                for festival in FESTIVALS_BY_REGION.get(country, ()):
                    if festival.category not in festival_types:
                        continue
                    day = resolve(festival.rule, year)
                    if day is not None and start <= day <= end:
                        by_date.setdefault(day.isoformat(), []).append(festival.name_zh or festival.name)

        holidays: Dict[str, HolidayRecord] = {}
        if "public_holiday" in wanted and self.holidays is not None:
            holidays = await self.holidays.get_holidays_for_years(country, start.year, end.year)

        entries: List[FestivalEntry] = []
        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            key = current.isoformat()
            entry = FestivalEntry(date=key, lunar_date=lunar_label(current))
            if "solar_term" in wanted:
                entry.solar_term = solar_term_on(current)
            entry.festivals.extend(by_date.get(key, []))
            record = holidays.get(key)
            if record is not None:
                entry.is_public_holiday = record.isOffDay
                entry.holiday_name = record.name
            if entry.has_content():
                entries.append(entry)
        return entries

    @staticmethod
    def _check_types(types: Optional[Iterable[str]]) -> set:
        if not types:
            return set(FESTIVAL_TYPES)
        wanted = set(types)
        unknown = wanted - set(FESTIVAL_TYPES)
        if unknown:
            raise InvalidInputError(f"Unknown festival types: {sorted(unknown)}", {"types": sorted(unknown)})
        return wanted
