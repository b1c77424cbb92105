"""
Feed 模块路由
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.models import ApiResponse, FeedFilters
from clipgraph.api.deps import get_current_user_optional, get_db_session
from clipgraph.services import feed_service

router = APIRouter()


@router.get("/{feed_type}", response_model=ApiResponse)
async def get_feed(
    feed_type: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    hashtag: Optional[str] = Query(None, description="话题标签（HASHTAG 必填）"),
    since: Optional[datetime] = Query(None, description="TRENDING 起始时间"),
    current_user: Optional[dict] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    获取 Feed

    - FOLLOWING 需要登录
    - 其余类型游客可查看
    - feed_type 不区分大小写，如 for_you、trending
    """
    viewer_id = current_user["user_id"] if current_user else None
    result = await feed_service.get_feed(
        session,
        feed_type.upper(),
        viewer_id=viewer_id,
        page=page,
        size=size,
        filters=FeedFilters(hashtag=hashtag, since=since),
    )
    return ApiResponse(data=result)
