"""
时钟

数据库时间戳统一使用不带时区的 UTC 时间
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """当前 UTC 时间（naive）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hours_between(start: datetime, end: datetime) -> float:
    """两个时间点之间的小时数（小数），负值按 0 处理"""
    seconds = (end - start).total_seconds()
    return max(0.0, seconds / 3600.0)


def to_naive_utc(value: datetime) -> datetime:
    """带时区的时间转换为 naive UTC，naive 时间原样返回"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
