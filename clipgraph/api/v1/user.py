"""
用户模块路由（关注、推荐关注、搜索、用户作品）
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.models import ApiResponse, UserCreate
from clipgraph.api.deps import get_current_user, get_current_user_optional, get_db_session
from clipgraph.services import user_service, engagement_service, feed_service, video_service, comment_service

router = APIRouter()


@router.post("", response_model=ApiResponse)
async def create_user(
    data: UserCreate,
    session: AsyncSession = Depends(get_db_session)
):
    """
    创建用户节点

    - 由认证服务注册成功后调用
    """
    user = await user_service.create_user(
        session, data.username, display_name=data.display_name, is_private=data.is_private
    )
    return ApiResponse(data=user, message="User created")


@router.get("/suggested", response_model=ApiResponse)
async def get_suggested_users(
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    current_user: Optional[dict] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    推荐关注

    - 游客可查看
    - 排除已关注的用户和自己
    - 按粉丝数降序
    """
    viewer_id = current_user["user_id"] if current_user else None
    result = await feed_service.suggested_users(session, viewer_id, page, size)
    return ApiResponse(data=result)


@router.get("/search", response_model=ApiResponse)
async def search_users(
    q: str = Query(..., description="用户名片段"),
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    session: AsyncSession = Depends(get_db_session)
):
    """
    按用户名搜索用户

    - 不区分大小写
    - 按粉丝数降序
    """
    result = await user_service.search_users(session, q, page, size)
    return ApiResponse(data=result)

@router.get("/{user_id}", response_model=ApiResponse)
async def get_user(
    user_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """获取用户信息"""
    user = await user_service.get_user(session, user_id)
    return ApiResponse(data=user)


@router.post("/{user_id}/follow", response_model=ApiResponse)
async def follow_user(
    user_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    关注用户

    - 需要登录
    - 不能关注自己
    - 重复关注不报错
    """
    state = await engagement_service.follow(session, current_user["user_id"], user_id)
    return ApiResponse(data=state)


@router.delete("/{user_id}/follow", response_model=ApiResponse)
async def unfollow_user(
    user_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """取消关注用户"""
    state = await engagement_service.unfollow(session, current_user["user_id"], user_id)
    return ApiResponse(data=state)


@router.get("/{user_id}/videos", response_model=ApiResponse)
async def list_user_videos(
    user_id: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    current_user: Optional[dict] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    用户发布的视频

    - 本人可以看到私密和未审核通过的视频
    """
    viewer_id = current_user["user_id"] if current_user else None
    result = await video_service.list_user_videos(session, user_id, viewer_id, page, size)
    return ApiResponse(data=result)


@router.get("/{user_id}/likes", response_model=ApiResponse)
async def list_liked_videos(
    user_id: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    current_user: Optional[dict] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """用户点赞过的视频（最近点赞的在前）"""
    viewer_id = current_user["user_id"] if current_user else None
    result = await video_service.list_liked_videos(session, user_id, viewer_id, page, size)
    return ApiResponse(data=result)


@router.get("/{user_id}/comments", response_model=ApiResponse)
async def list_user_comments(
    user_id: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    session: AsyncSession = Depends(get_db_session)
):
    """用户发表的评论（最新在前）"""
    result = await comment_service.list_user_comments(session, user_id, page, size)
    return ApiResponse(data=result)
