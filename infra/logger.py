import sys
from datetime import datetime
from typing import Literal

from infra.config.settings import settings

Level = Literal["DEBUG", "INFO", "WARN", "ERROR"]


class _ColoredFormatter:
    _colors = {
        "DEBUG": "\033[36m",  # 青
        "INFO": "\033[32m",  # 绿
        "WARN": "\033[33m",  # 黄
        "ERROR": "\033[31m",  # 红
        "RESET": "\033[0m",
    }

    @classmethod
    def colorize(cls, level: Level, text: str) -> str:
        if not sys.stderr.isatty():
            return text
        return f"{cls._colors[level]}{text}{cls._colors['RESET']}"


class Logger:
    _level_rank = {"DEBUG": 0, "INFO": 1, "WARN": 2, "WARNING": 2, "ERROR": 3}
    _current_level = _level_rank.get(settings.LOG_LEVEL.upper(), 1)

    @classmethod
    def set_level(cls, level: str):
        cls._current_level = cls._level_rank.get(level.upper(), cls._current_level)

    @classmethod
    def _log(cls, level: Level, module: str, msg: str):
        if cls._level_rank[level] < cls._current_level:
            return
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"{ts} [{level}] {module} | {msg}"
        print(_ColoredFormatter.colorize(level, line), file=sys.stderr)

    @staticmethod
    def debug(module: str, msg: str):
        Logger._log("DEBUG", module, msg)

    @staticmethod
    def info(module: str, msg: str):
        Logger._log("INFO", module, msg)

    @staticmethod
    def warn(module: str, msg: str):
        Logger._log("WARN", module, msg)

    @staticmethod
    def error(module: str, msg: str):
        Logger._log("ERROR", module, msg)


logger = Logger
