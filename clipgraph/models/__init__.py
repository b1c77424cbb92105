"""
数据模型模块

导出所有 Pydantic 数据模型，用于服务层返回值与 API 请求/响应验证
"""

# 通用响应
from .response import ApiResponse, ErrorResponse, PageMeta

# 互动结果
from .engagement import LikeState, CommentLikeState, FollowState, ViewState, ShareState, SaveState

# 用户
from .user import UserCreate, UserSummary, UserPage

# 视频
from .video import ReviewStatus, VideoCreate, CaptionUpdate, VideoModel

# 评论
from .comment import (
    CommentCreate, CommentModel, CommentThread,
    CommentThreadPage, CommentDeleteResult, CommentPage
)

# Feed
from .feed import FeedType, FeedFilters, VideoSummary, FeedPage, VideoPage

__all__ = [
    # Response
    "ApiResponse",
    "ErrorResponse",
    "PageMeta",

    # Engagement
    "LikeState",
    "CommentLikeState",
    "FollowState",
    "ViewState",
    "ShareState",
    "SaveState",

    # User
    "UserCreate",
    "UserSummary",
    "UserPage",

    # Video
    "ReviewStatus",
    "VideoCreate",
    "CaptionUpdate",
    "VideoModel",

    # Comment
    "CommentCreate",
    "CommentModel",
    "CommentThread",
    "CommentThreadPage",
    "CommentDeleteResult",
    "CommentPage",

    # Feed
    "FeedType",
    "FeedFilters",
    "VideoSummary",
    "FeedPage",
    "VideoPage",
]
