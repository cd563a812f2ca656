from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from infra.config.settings import settings
from infra.errors import ChronoError
from infra.logger import logger
from service.holiday.service import HolidayService


class HolidayPrefetchScheduler:
    """
    每天定时预取配置国家今年和明年的节假日，跨年后第一次查询不必等网络。
    之前拿到空数据的年份（比如明年的安排还没公布）每次都会重新请求。
    """

    def __init__(
        self,
        holiday_service: HolidayService,
        countries: Optional[List[str]] = None,
        hour: Optional[int] = None,
        timezone: Optional[str] = None,
    ):
        self.service = holiday_service
        self.countries = countries if countries is not None else list(settings.PREFETCH_COUNTRIES)
        self.hour = hour if hour is not None else settings.PREFETCH_HOUR
        self.timezone = timezone or settings.SCHEDULER_TIMEZONE
        self.tz = ZoneInfo(self.timezone)
        self.scheduler = AsyncIOScheduler(timezone=self.timezone)

    def start(self):
        self.scheduler.add_job(
            self.prefetch,
            trigger="cron",
            hour=self.hour,
            minute=0,
            id="holiday_prefetch",
            replace_existing=True,
            next_run_time=datetime.now(tz=self.tz),  # 启动时先跑一次
        )
        self.scheduler.start()
        logger.info("HolidayPrefetch", f"已启动，每天 {self.hour}:00，国家: {','.join(self.countries) or '-'}")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    async def prefetch(self) -> int:
        """返回本次拿到的记录条数"""
        year = datetime.now(tz=self.tz).year
        total = 0
        for country in self.countries:
            for y in (year, year + 1):
                try:
                    holiday_set = await self.service.refresh(country, y)
                except ChronoError as e:
                    logger.warn("HolidayPrefetch", f"[{country}-{y}] 跳过: {e}")
                    continue
                total += len(holiday_set)
        logger.info("HolidayPrefetch", f"预取完成，共 {total} 条记录")
        return total
