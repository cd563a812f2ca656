import os
from typing import Any, Dict, Optional

from infra.config.settings import Settings
from infra.logger import Logger
from service.business.service import BusinessDayService
from service.festival.service import FestivalService
from service.holiday.client import HolidayClient
from service.holiday.service import HolidayService
from service.holiday.store import FileHolidayStore
from service.tools.calendar_tools import CalendarTools
from service.tools.manager import ToolManager
from service.tools.models import ToolCallResult
from .scheduler.holiday_prefetch import HolidayPrefetchScheduler


class ChronoApp:
    """各服务只在这里构造一次，之后共用同一个 HolidayService（以及它的缓存）"""

    def __init__(self, settings, holiday_svc, business_svc, festival_svc, tool_manager, prefetcher):
        self.settings = settings
        self.holiday_svc = holiday_svc
        self.business_svc = business_svc
        self.festival_svc = festival_svc
        self.tool_manager = tool_manager
        self.prefetcher = prefetcher

    @classmethod
    def create(cls, settings: Optional[Settings] = None, holiday_svc: Optional[HolidayService] = None) -> "ChronoApp":
        settings = settings or Settings()
        Logger.set_level(settings.LOG_LEVEL)
        holiday_svc = holiday_svc or HolidayService(
            client=HolidayClient(
                settings.HOLIDAY_CN_API_BASE,
                settings.HOLIDAY_PUBLIC_API_BASE,
                settings.HOLIDAY_HTTP_TIMEOUT,
            ),
            store=FileHolidayStore(os.path.join(settings.DATA_DIR, "cache", "holidays")),
        )
        business_svc = BusinessDayService(holiday_svc)
        festival_svc = FestivalService(holiday_svc)
        tool_manager = CalendarTools(holiday_svc, business_svc, festival_svc).register_all(ToolManager())
        prefetcher = HolidayPrefetchScheduler(
            holiday_svc,
            list(settings.PREFETCH_COUNTRIES),
            hour=settings.PREFETCH_HOUR,
            timezone=settings.SCHEDULER_TIMEZONE,
        )
        return cls(settings, holiday_svc, business_svc, festival_svc, tool_manager, prefetcher)

    def start(self):
        """调用链：启动预取任务 -> 宿主通过 call_tool 调用各工具"""
        self.prefetcher.start()
        Logger.info("ChronoApp", f"已注册工具: {', '.join(self.tool_manager.tools)}")

    async def call_tool(self, name: str, parameters: Optional[Dict[str, Any]] = None) -> ToolCallResult:
        return await self.tool_manager.call_tool(name, parameters)

    async def stop(self):
        self.prefetcher.stop()
        await self.holiday_svc.aclose()
