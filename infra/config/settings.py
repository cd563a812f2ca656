import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env"
    )

    # 数据目录，节假日缓存写在 {DATA_DIR}/cache/holidays 下
    DATA_DIR: str = os.path.join(os.path.expanduser("~"), ".kichrono")

    # 节假日数据源
    HOLIDAY_CN_API_BASE: str = "https://timor.tech"
    HOLIDAY_PUBLIC_API_BASE: str = "https://date.nager.at"
    HOLIDAY_HTTP_TIMEOUT: float = 8.0
    HOLIDAY_USER_AGENT: str = "KiChrono/1.0"

    # 日期计算
    DEFAULT_TIMEZONE: str = "UTC"

    # 节假日预取
    PREFETCH_COUNTRIES: List[str] = ["CN"]
    PREFETCH_HOUR: int = 3
    SCHEDULER_TIMEZONE: str = "Asia/Shanghai"

    LOG_LEVEL: str = "INFO"


settings = Settings()
