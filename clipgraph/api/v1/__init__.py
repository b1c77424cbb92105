"""
API v1 路由汇总
"""

from fastapi import APIRouter

from .video import router as video_router
from .user import router as user_router
from .comment import router as comment_router
from .feed import router as feed_router

# 创建 v1 API 路由
api_router = APIRouter()

# 注册子路由（按前缀分组）
api_router.include_router(video_router, prefix="/videos", tags=["Video"])
api_router.include_router(user_router, prefix="/users", tags=["User"])
api_router.include_router(comment_router, tags=["Comment"])
api_router.include_router(feed_router, prefix="/feed", tags=["Feed"])
