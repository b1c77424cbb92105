"""
业务服务层
"""

from .engagement_service import engagement_service, EngagementService
from .comment_service import comment_service, CommentService
from .scoring_service import scoring_service, ScoringService
from .feed_service import feed_service, FeedService
from .user_service import user_service, UserService
from .video_service import video_service, VideoService

__all__ = [
    # 服务类
    "EngagementService",
    "CommentService",
    "ScoringService",
    "FeedService",
    "UserService",
    "VideoService",
    # 全局服务实例
    "engagement_service",
    "comment_service",
    "scoring_service",
    "feed_service",
    "user_service",
    "video_service",
]
