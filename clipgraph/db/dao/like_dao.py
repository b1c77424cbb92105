"""
点赞关系数据访问对象（视频点赞、评论点赞）
"""

from sqlalchemy import select, delete, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.like import VideoLike, CommentLike
from clipgraph.db.dao.base_dao import insert_unique


class LikeDAO:
    """视频点赞 DAO"""

    @staticmethod
    async def exists(session: AsyncSession, user_id: str, video_id: str) -> bool:
        """检查用户是否已点赞视频"""
        result = await session.execute(
            select(func.count(VideoLike.id)).where(
                and_(
                    VideoLike.user_id == user_id,
                    VideoLike.video_id == video_id
                )
            )
        )
        return (result.scalar() or 0) > 0

    @staticmethod
    async def create(session: AsyncSession, user_id: str, video_id: str) -> bool:
        """
        创建点赞关系

        Returns:
            是否创建成功（False 表示唯一约束冲突，点赞已存在）
        """
        return await insert_unique(session, VideoLike(user_id=user_id, video_id=video_id))

    @staticmethod
    async def delete(session: AsyncSession, user_id: str, video_id: str) -> bool:
        """
        删除点赞关系

        Returns:
            是否删除了记录
        """
        result = await session.execute(
            delete(VideoLike).where(
                and_(
                    VideoLike.user_id == user_id,
                    VideoLike.video_id == video_id
                )
            )
        )
        return result.rowcount > 0


class CommentLikeDAO:
    """评论点赞 DAO"""

    @staticmethod
    async def exists(session: AsyncSession, user_id: str, comment_id: str) -> bool:
        """检查用户是否已点赞评论"""
        result = await session.execute(
            select(func.count(CommentLike.id)).where(
                and_(
                    CommentLike.user_id == user_id,
                    CommentLike.comment_id == comment_id
                )
            )
        )
        return (result.scalar() or 0) > 0

    @staticmethod
    async def create(session: AsyncSession, user_id: str, comment_id: str) -> bool:
        """创建评论点赞（False 表示已存在）"""
        return await insert_unique(session, CommentLike(user_id=user_id, comment_id=comment_id))

    @staticmethod
    async def delete(session: AsyncSession, user_id: str, comment_id: str) -> bool:
        """删除评论点赞"""
        result = await session.execute(
            delete(CommentLike).where(
                and_(
                    CommentLike.user_id == user_id,
                    CommentLike.comment_id == comment_id
                )
            )
        )
        return result.rowcount > 0
