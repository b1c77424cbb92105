"""
视频模块路由
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.models import ApiResponse, VideoCreate, CaptionUpdate
from clipgraph.api.deps import get_current_user, get_db_session
from clipgraph.services import video_service, engagement_service, comment_service, user_service

router = APIRouter()


async def _require_owner(session: AsyncSession, video_id: str, user_id: str):
    video = await video_service.get_video(session, video_id)
    if video.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "NOT_OWNER", "message": "Only the author can modify this video"}
        )
    return video


@router.post("", response_model=ApiResponse)
async def create_video(
    data: VideoCreate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    发布视频

    - 需要登录
    - 话题标签从文案中解析
    """
    video = await video_service.create_video(session, current_user["user_id"], data)
    return ApiResponse(data=video, message="Video published")


@router.get("/{video_id}", response_model=ApiResponse)
async def get_video(
    video_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """获取视频详情"""
    video = await video_service.get_video(session, video_id)
    return ApiResponse(data=video)


@router.patch("/{video_id}/caption", response_model=ApiResponse)
async def update_caption(
    video_id: str,
    data: CaptionUpdate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    修改文案

    - 仅作者可修改
    - 话题标签随文案重建
    """
    await _require_owner(session, video_id, current_user["user_id"])
    video = await video_service.update_caption(session, video_id, data.caption)
    return ApiResponse(data=video, message="Caption updated")


@router.delete("/{video_id}", response_model=ApiResponse)
async def delete_video(
    video_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    下架视频

    - 仅作者可下架
    """
    await _require_owner(session, video_id, current_user["user_id"])
    deleted = await video_service.soft_delete_video(session, video_id)
    return ApiResponse(data={"video_id": video_id, "deleted": deleted}, message="Video deleted")


@router.post("/{video_id}/like", response_model=ApiResponse)
async def like_video(
    video_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    点赞视频

    - 需要登录
    - 重复点赞不报错，计数不变
    """
    state = await engagement_service.like(session, current_user["user_id"], video_id)
    return ApiResponse(data=state)


@router.delete("/{video_id}/like", response_model=ApiResponse)
async def unlike_video(
    video_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """取消点赞视频"""
    state = await engagement_service.unlike(session, current_user["user_id"], video_id)
    return ApiResponse(data=state)


@router.post("/{video_id}/view", response_model=ApiResponse)
async def record_view(
    video_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """记录播放（游客也计数）"""
    state = await engagement_service.record_view(session, video_id)
    return ApiResponse(data=state)


@router.post("/{video_id}/share", response_model=ApiResponse)
async def record_share(
    video_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """记录分享"""
    state = await engagement_service.record_share(session, video_id)
    return ApiResponse(data=state)


@router.post("/{video_id}/save", response_model=ApiResponse)
async def record_save(
    video_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """记录收藏"""
    state = await engagement_service.record_save(session, video_id)
    return ApiResponse(data=state)


@router.get("/{video_id}/likers", response_model=ApiResponse)
async def list_likers(
    video_id: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    session: AsyncSession = Depends(get_db_session)
):
    """点赞了视频的用户（最近点赞的在前）"""
    result = await user_service.list_likers(session, video_id, page, size)
    return ApiResponse(data=result)


@router.get("/{video_id}/comments/count", response_model=ApiResponse)
async def count_comments(
    video_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """统计未删除的评论数"""
    count = await comment_service.count_active(session, video_id)
    return ApiResponse(data={"video_id": video_id, "count": count})
