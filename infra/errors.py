"""
KiChrono 异常定义

- CHRONO_INPUT_INVALID: 调用方传入的日期 / 时区 / 国家代码等不合法
- CHRONO_INTERNAL_ERROR: 其他未预期的错误

未找到节日、数据源不可用、缓存文件损坏都不是异常，分别以 None / 空集合 / 缓存未命中的形式返回。
"""

from typing import Any, Dict, Optional

__all__ = [
    "ChronoError",
    "InvalidInputError",
]


class ChronoError(Exception):
    """所有 KiChrono 错误的基类，带一个固定的错误码，可序列化为 dict 供工具返回。"""

    code: str = "CHRONO_INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return self.message


class InvalidInputError(ChronoError, ValueError):
    code = "CHRONO_INPUT_INVALID"
