"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from clipgraph.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .user import User
from .video import Video, VideoHashtag
from .like import VideoLike, CommentLike
from .follow import UserFollow
from .comment import Comment

__all__ = [
    # Base
    "Base",

    # Models
    "User",
    "Video",
    "VideoHashtag",
    "VideoLike",
    "CommentLike",
    "UserFollow",
    "Comment",
]
