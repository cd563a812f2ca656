import asyncio
import os
import re
from datetime import date as dt
from typing import Dict, Optional

from infra.config.settings import settings
from infra.errors import InvalidInputError
from infra.logger import logger
from .client import HolidayClient
from .models import HolidayRecord, HolidaySet
from .store import FileHolidayStore, MemoryHolidayStore

_COUNTRY_RE = re.compile(r"^[A-Za-z]{2}$")


def normalize_country(country: str) -> str:
    """ISO 3166-1 二位代码，大小写不敏感，统一转大写"""
    if not isinstance(country, str) or not _COUNTRY_RE.match(country.strip()):
        raise InvalidInputError(f"Invalid country code: {country!r}", {"country": country})
    return country.strip().upper()


def validate_year(year: int) -> int:
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year <= 9999:
        raise InvalidInputError(f"Invalid year: {year!r}", {"year": year})
    return year


class HolidayService:
    """
    节假日缓存，查询顺序：内存 -> 磁盘 -> 数据源。

    同一 key 并发未命中时只会发起一次请求，其余调用方等待同一个结果。
    数据源返回空（包括请求失败）时只记在内存里，不落盘。
    """

    def __init__(
        self,
        client: Optional[HolidayClient] = None,
        store: Optional[FileHolidayStore] = None,
        memory: Optional[MemoryHolidayStore] = None,
    ):
        self.client = client or HolidayClient()
        self.store = store or FileHolidayStore(os.path.join(settings.DATA_DIR, "cache", "holidays"))
        self.memory = memory or MemoryHolidayStore()
        self._inflight: Dict[str, asyncio.Task] = {}

    @staticmethod
    def cache_key(country: str, year: int) -> str:
        return f"{country}-{year}"

    async def get_holidays(self, country: str, year: int) -> HolidaySet:
        country = normalize_country(country)
        year = validate_year(year)
        key = self.cache_key(country, year)

        cached = self.memory.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(country, year, key))
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._forget(key, t))
        # shield：某个调用方被取消时不影响其他等待者
        return await asyncio.shield(task)

    async def refresh(self, country: str, year: int) -> HolidaySet:
        """
        供定时预取使用：内存里是空集时丢掉它重新走一遍加载流程，
        非空的直接返回。空集从不落盘，所以会真正请求数据源。
        """
        country = normalize_country(country)
        year = validate_year(year)
        key = self.cache_key(country, year)
        cached = self.memory.get(key)
        if cached is not None and len(cached) == 0 and key not in self._inflight:
            self.memory.pop(key)
        return await self.get_holidays(country, year)

    def _forget(self, key: str, task: asyncio.Task):
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _load(self, country: str, year: int, key: str) -> HolidaySet:
        disk_cached = await asyncio.to_thread(self.store.load, country, year)
        if disk_cached is not None:
            logger.debug("HolidayService", f"[{key}] 命中磁盘缓存")
            self.memory.put(key, disk_cached)
            return disk_cached

        logger.info("HolidayService", f"[{key}] 缓存未命中，请求数据源")
        records = await self.client.fetch(country, year)
        holiday_set = HolidaySet.from_records(country, year, records)

        if len(holiday_set) > 0:
            try:
                await asyncio.to_thread(self.store.save, holiday_set)
            except OSError as e:
                logger.error("HolidayService", f"[{key}] 写入磁盘缓存失败: {e}")
        else:
            logger.warn("HolidayService", f"[{key}] 数据源无数据，本次进程内不再重试")

        self.memory.put(key, holiday_set)
        return holiday_set

    async def get_holidays_for_years(self, country: str, start_year: int, end_year: int) -> Dict[str, HolidayRecord]:
        """合并多个年份的节假日，供逐日判断前一次性预加载"""
        merged: Dict[str, HolidayRecord] = {}
        for year in range(start_year, end_year + 1):
            holiday_set = await self.get_holidays(country, year)
            merged.update(holiday_set.records)
        return merged

    def lookup(self, country: str, day: dt) -> Optional[HolidayRecord]:
        """只查已有缓存（内存、磁盘），不发起网络请求"""
        country = normalize_country(country)
        key = self.cache_key(country, day.year)
        holiday_set = self.memory.get(key)
        if holiday_set is None:
            holiday_set = self.store.load(country, day.year)
            if holiday_set is None:
                return None
            self.memory.put(key, holiday_set)
        return holiday_set.get(day)

    async def aclose(self):
        await self.client.aclose()
