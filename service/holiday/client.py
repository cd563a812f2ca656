"""
节假日数据源：
- 中国大陆 https://timor.tech/api/holiday ，包含调休补班
- 其他国家 https://date.nager.at ，只有公众假期
"""

import httpx
from typing import Any, List, Optional

from pydantic import ValidationError

from infra.config.settings import settings
from infra.logger import logger
from .models import HolidayRecord


class HolidayClient:

    def __init__(
        self,
        cn_base_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cn_base_url = (cn_base_url or settings.HOLIDAY_CN_API_BASE).rstrip("/")
        self.public_base_url = (public_base_url or settings.HOLIDAY_PUBLIC_API_BASE).rstrip("/")
        self.headers = {
            "User-Agent": settings.HOLIDAY_USER_AGENT,
            "Accept": "application/json",
        }   # timor.tech 会拒绝没有 User-Agent 的请求
        self.client = httpx.AsyncClient(
            headers=self.headers,
            timeout=httpx.Timeout(timeout or settings.HOLIDAY_HTTP_TIMEOUT, connect=5),
            follow_redirects=True,
            transport=transport,
        )

    async def fetch(self, country: str, year: int) -> List[HolidayRecord]:
        """获取一整年的节假日，任何失败都返回空列表"""
        code = country.upper()
        if code == "CN":
            return await self.fetch_china(year)
        return await self.fetch_public(year, code)

    async def fetch_china(self, year: int) -> List[HolidayRecord]:
        url = f"{self.cn_base_url}/api/holiday/year/{year}"
        data = await self._get_json(url, f"CN-{year}")
        if not isinstance(data, dict):
            return []
        if data.get("code") != 0 or not isinstance(data.get("holiday"), dict):
            logger.warn("HolidayClient", f"[CN-{year}] 数据源返回异常: code={data.get('code')}")
            return []

        try:
            return [self._parse_china_item(year, key, info) for key, info in data["holiday"].items()]
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.warn("HolidayClient", f"[CN-{year}] 解析节假日数据失败: {e}")
            return []

    @staticmethod
    def _parse_china_item(year: int, key: str, info: dict) -> HolidayRecord:
        # key 可能是 "MM-DD" 也可能是 "YYYY-MM-DD"，统一补零为 YYYY-MM-DD
        full = key if key.startswith(str(year)) else f"{year}-{key}"
        y, m, d = full.split("-")
        is_off = info.get("holiday") is True
        return HolidayRecord(
            date=f"{y}-{m.zfill(2)}-{d.zfill(2)}",
            name=info.get("name") or "",
            isOffDay=is_off,
            kind="public_holiday" if is_off else "makeup_workday",
        )

    async def fetch_public(self, year: int, country_code: str) -> List[HolidayRecord]:
        url = f"{self.public_base_url}/api/v3/publicholidays/{year}/{country_code}"
        data = await self._get_json(url, f"{country_code}-{year}")
        if not isinstance(data, list):
            if data is not None:
                logger.warn("HolidayClient", f"[{country_code}-{year}] 返回数据不是数组")
            return []

        try:
            return [
                HolidayRecord(
                    date=item["date"],
                    name=item.get("localName") or item.get("name") or "",
                    isOffDay=True,
                    kind="public_holiday",
                )
                for item in data
            ]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.warn("HolidayClient", f"[{country_code}-{year}] 解析节假日数据失败: {e}")
            return []

    async def _get_json(self, url: str, tag: str) -> Optional[Any]:
        try:
            resp = await self.client.get(url)
        except httpx.TimeoutException:
            logger.warn("HolidayClient", f"[{tag}] 请求超时")
            return None
        except httpx.HTTPError as e:
            logger.warn("HolidayClient", f"[{tag}] 请求失败: {e}")
            return None

        if not resp.is_success:
            logger.warn("HolidayClient", f"[{tag}] HTTP {resp.status_code}")
            return None

        try:
            return resp.json()
        except ValueError as e:
            logger.warn("HolidayClient", f"[{tag}] JSON 解析失败: {e}, body: {resp.text[:200]}")
            return None

    async def aclose(self):
        await self.client.aclose()
