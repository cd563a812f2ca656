import json
import os
import tempfile
from typing import Dict, Optional

from pydantic import TypeAdapter, ValidationError

from infra.logger import logger
from .models import HolidayRecord, HolidaySet

_records_adapter = TypeAdapter(list[HolidayRecord])


class MemoryHolidayStore:
    """进程内缓存，key 为 "{COUNTRY}-{year}"，进程退出即清空"""

    def __init__(self):
        self._sets: Dict[str, HolidaySet] = {}

    def get(self, key: str) -> Optional[HolidaySet]:
        return self._sets.get(key)

    def put(self, key: str, holiday_set: HolidaySet):
        self._sets[key] = holiday_set

    def pop(self, key: str) -> Optional[HolidaySet]:
        return self._sets.pop(key, None)

    def clear(self):
        self._sets.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._sets


class FileHolidayStore:
    """磁盘缓存，每个 (国家, 年份) 一个 JSON 文件，不过期"""

    def __init__(self, cache_dir: str):
        self.cache_dir = cache_dir

    def path_for(self, country: str, year: int) -> str:
        return os.path.join(self.cache_dir, f"{country.upper()}-{year}.json")

    def load(self, country: str, year: int) -> Optional[HolidaySet]:
        """文件不存在或损坏都返回 None，调用方按未命中处理"""
        path = self.path_for(country, year)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = _records_adapter.validate_python(json.load(f))
        except (OSError, ValueError, RecursionError, ValidationError) as e:
            # ValueError 包括 JSON 语法错误和非 UTF-8 内容，RecursionError 是嵌套过深
            logger.warn("HolidayStore", f"缓存文件 {path} 无法读取，视为未命中: {e}")
            return None
        return HolidaySet.from_records(country.upper(), year, records)

    def save(self, holiday_set: HolidaySet):
        """整文件替换：先写临时文件再 rename，避免写一半留下截断的缓存"""
        os.makedirs(self.cache_dir, exist_ok=True)
        path = self.path_for(holiday_set.country, holiday_set.year)
        payload = [r.model_dump() for r in holiday_set.to_list()]
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, prefix=".holidays-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
