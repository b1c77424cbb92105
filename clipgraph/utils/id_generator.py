"""
ID 生成器

提供各种实体的唯一 ID 生成功能
"""

import ulid


def generate_ulid() -> str:
    """
    生成 ULID（Universally Unique Lexicographically Sortable Identifier）

    特点：
    - 按时间排序
    - 规范化的字符串表示（26个字符）
    - 不包含 "."，可直接拼接进评论路径

    Returns:
        ULID 字符串
    """
    return str(ulid.new())


def generate_user_id() -> str:
    """
    生成用户 ID

    格式：user_<ulid>
    """
    return f"user_{generate_ulid()}"


def generate_video_id() -> str:
    """
    生成视频 ID

    格式：video_<ulid>
    """
    return f"video_{generate_ulid()}"


def generate_comment_id() -> str:
    """
    生成评论 ID

    格式：comment_<ulid>
    示例：comment_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        评论 ID
    """
    return f"comment_{generate_ulid()}"
