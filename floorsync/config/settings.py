"""应用配置模块

使用 Pydantic Settings 管理应用配置，支持从 .env 文件加载环境变量
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # 应用配置
    APP_TITLE: str = "车间工单跟踪"
    APP_DESCRIPTION: str = "Shop floor work order tracking with real-time updates"
    APP_VERSION: str = "1.0.0"

    # MySQL 配置 - 从环境变量加载
    MYSQL_USER: str = ""
    MYSQL_PASSWORD: str = ""
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: str = "3306"
    MYSQL_DB: str = "floorsync"

    # 数据库配置 - 优先使用DATABASE_URL，否则从MySQL配置构建
    DATABASE_URL: str = ""
    ECHO_SQL: bool = False  # 是否打印SQL日志

    # 日志级别
    LOG_LEVEL: str = "INFO"

    # 车间所在时区，用于计算"今日完成"
    SHOP_TIMEZONE: str = "UTC"

    # 每个观察者的推送队列长度，溢出时丢弃该条推送
    EVENT_QUEUE_SIZE: int = 256

    # 广播器按版本去重时最多记住的实体数
    EVENT_VERSION_CACHE_SIZE: int = 10000

    # 同一机台同时只允许一条未解除的停机告警
    DOWNTIME_SINGLE_ACTIVE_PER_MACHINE: bool = True

    CORS_ORIGINS: List[str] = ["*"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # 如果没有显式设置DATABASE_URL，从MySQL配置构建
        if not self.DATABASE_URL:
            if self.MYSQL_USER and self.MYSQL_PASSWORD:
                self.DATABASE_URL = (
                    f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
                    f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
                )
            else:
                # 本地开发默认使用 SQLite
                self.DATABASE_URL = "sqlite:///./floorsync.db"


# 创建全局配置实例
settings = Settings()
