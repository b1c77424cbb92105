"""
评论模块路由
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.models import ApiResponse, CommentCreate
from clipgraph.api.deps import get_current_user, get_db_session
from clipgraph.services import comment_service, engagement_service

router = APIRouter()


@router.get("/videos/{video_id}/comments", response_model=ApiResponse)
async def get_video_comments(
    video_id: str,
    page: int = Query(0, description="页码（从 0 开始）"),
    size: Optional[int] = Query(None, description="每页数量"),
    with_replies: bool = Query(True, description="是否附带前几条回复"),
    session: AsyncSession = Depends(get_db_session)
):
    """
    获取视频评论列表

    - 游客可查看
    - 顶级评论按时间倒序，回复按时间正序
    """
    result = await comment_service.list_thread(session, video_id, page, size, with_replies)
    return ApiResponse(data=result)


@router.post("/videos/{video_id}/comments", response_model=ApiResponse)
async def create_comment(
    video_id: str,
    data: CommentCreate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    发表评论

    - 需要登录
    - 填写 parent_id 时为回复，层级不限
    """
    if data.parent_id:
        parent = await comment_service.get_comment(session, data.parent_id)
        if parent.video_id != video_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"code": "PARENT_MISMATCH", "message": "Parent comment belongs to another video"}
            )
        comment = await comment_service.add_reply(
            session, data.parent_id, current_user["user_id"], data.content
        )
    else:
        comment = await comment_service.add_comment(
            session, video_id, current_user["user_id"], data.content
        )

    return ApiResponse(data=comment, message="Comment created")


@router.get("/comments/{comment_id}/replies", response_model=ApiResponse)
async def get_replies(
    comment_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """获取直接回复"""
    replies = await comment_service.list_replies(session, comment_id)
    return ApiResponse(data=replies)


@router.get("/comments/{comment_id}/subtree", response_model=ApiResponse)
async def get_subtree(
    comment_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """获取全部后代评论"""
    descendants = await comment_service.list_subtree(session, comment_id)
    return ApiResponse(data=descendants)


@router.delete("/comments/{comment_id}", response_model=ApiResponse)
async def delete_comment(
    comment_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    删除评论

    - 只能删除自己的评论
    - 软删除，回复保留
    """
    comment = await comment_service.get_comment(session, comment_id)
    if comment.user_id != current_user["user_id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "NOT_OWNER", "message": "Only the author can delete this comment"}
        )

    result = await comment_service.delete_comment(session, comment_id)
    return ApiResponse(data=result, message="Comment deleted")


@router.post("/comments/{comment_id}/like", response_model=ApiResponse)
async def like_comment(
    comment_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """点赞评论"""
    state = await engagement_service.like_comment(session, current_user["user_id"], comment_id)
    return ApiResponse(data=state)


@router.delete("/comments/{comment_id}/like", response_model=ApiResponse)
async def unlike_comment(
    comment_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """取消点赞评论"""
    state = await engagement_service.unlike_comment(session, current_user["user_id"], comment_id)
    return ApiResponse(data=state)
