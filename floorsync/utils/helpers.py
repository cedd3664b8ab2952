"""工具函数模块

包含时间与数值处理的常用工具函数
"""

from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """当前 UTC 时间（不带时区信息，与数据库中存储的时间一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clamp_progress(value: int) -> int:
    """将进度限制在 [0, 100] 区间内"""
    return max(0, min(100, int(value)))


def start_of_day_utc(tz_name: str, now: datetime = None) -> datetime:
    """计算车间时区"今天"零点对应的 UTC 时间（不带时区信息）

    now 为不带时区的 UTC 时间，缺省为当前时间
    """
    tz = ZoneInfo(tz_name)
    now = now or utcnow()
    local_now = now.replace(tzinfo=timezone.utc).astimezone(tz)
    local_midnight = datetime.combine(local_now.date(), time.min, tzinfo=tz)
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)
