"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .counter_dao import CounterDAO
from .user_dao import UserDAO
from .video_dao import VideoDAO
from .like_dao import LikeDAO, CommentLikeDAO
from .follow_dao import FollowDAO
from .comment_dao import CommentDAO

__all__ = [
    "CounterDAO",
    "UserDAO",
    "VideoDAO",
    "LikeDAO",
    "CommentLikeDAO",
    "FollowDAO",
    "CommentDAO",
]
