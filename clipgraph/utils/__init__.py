"""
工具模块
"""

from .id_generator import generate_ulid, generate_user_id, generate_video_id, generate_comment_id
from .clock import Clock, utc_now, hours_between, to_naive_utc
from .hashtags import extract_hashtags, normalize_hashtag

__all__ = [
    # ID 生成器
    "generate_ulid",
    "generate_user_id",
    "generate_video_id",
    "generate_comment_id",

    # 时钟
    "Clock",
    "utc_now",
    "hours_between",
    "to_naive_utc",

    # 话题标签
    "extract_hashtags",
    "normalize_hashtag",
]
