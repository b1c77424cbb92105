"""
评论数据访问对象
"""

from typing import Optional, List, Tuple
from sqlalchemy import select, update, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.comment import Comment
from clipgraph.db.models.video import Video
from clipgraph.utils.id_generator import generate_comment_id

TOMBSTONE = "[deleted]"


class CommentDAO:
    """评论 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        video_id: str,
        user_id: str,
        content: str,
        parent: Optional[Comment] = None
    ) -> Comment:
        """
        创建评论

        ID 与路径在同一处确定：路径只依赖父评论已分配的ID，插入后不再修改

        Args:
            session: 数据库会话
            video_id: 视频ID
            user_id: 用户ID
            content: 评论内容
            parent: 父评论（回复时传入）

        Returns:
            Comment: 新创建的评论对象
        """
        if parent is None:
            path, depth, parent_id = "", 0, None
        else:
            path, depth, parent_id = parent.child_path(), parent.depth + 1, parent.id

        comment = Comment(
            id=generate_comment_id(),
            video_id=video_id,
            user_id=user_id,
            parent_id=parent_id,
            content=content,
            path=path,
            depth=depth,
            is_deleted=False,
            likes_count=0,
            replies_count=0,
        )

        session.add(comment)
        await session.flush()

        return comment

    @staticmethod
    async def get_by_id(session: AsyncSession, comment_id: str) -> Optional[Comment]:
        """根据ID获取评论"""
        result = await session.execute(
            select(Comment).where(Comment.id == comment_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_top_level(
        session: AsyncSession,
        video_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[Comment]:
        """
        获取视频的顶级评论（最新在前）

        Args:
            session: 数据库会话
            video_id: 视频ID
            limit: 每页数量
            offset: 偏移量

        Returns:
            评论列表
        """
        result = await session.execute(
            select(Comment)
            .where(
                and_(
                    Comment.video_id == video_id,
                    Comment.parent_id.is_(None)
                )
            )
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_top_level(session: AsyncSession, video_id: str) -> int:
        """统计视频的顶级评论数量（含已删除的占位评论）"""
        result = await session.execute(
            select(func.count(Comment.id))
            .where(
                and_(
                    Comment.video_id == video_id,
                    Comment.parent_id.is_(None)
                )
            )
        )
        return result.scalar() or 0

    @staticmethod
    async def get_replies(
        session: AsyncSession,
        parent_id: str,
        limit: Optional[int] = None
    ) -> List[Comment]:
        """
        获取评论的直接回复（按时间正序）

        Args:
            session: 数据库会话
            parent_id: 父评论ID
            limit: 最多返回数量（None 表示全部）

        Returns:
            回复列表
        """
        query = (
            select(Comment)
            .where(Comment.parent_id == parent_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        if limit is not None:
            query = query.limit(limit)

        result = await session.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_subtree(session: AsyncSession, comment: Comment) -> List[Comment]:
        """
        获取评论的全部后代（按路径前缀匹配，先序遍历顺序）
        """
        result = await session.execute(
            select(Comment)
            .where(
                and_(
                    Comment.video_id == comment.video_id,
                    Comment.path.startswith(comment.child_path(), autoescape=True)
                )
            )
            .order_by(Comment.path.concat(Comment.id).asc(), Comment.created_at.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_active(session: AsyncSession, video_id: str) -> int:
        """统计视频未删除的评论数量"""
        result = await session.execute(
            select(func.count(Comment.id))
            .where(
                and_(
                    Comment.video_id == video_id,
                    Comment.is_deleted.is_(False)
                )
            )
        )
        return result.scalar() or 0

    @staticmethod
    async def soft_delete(session: AsyncSession, comment: Comment) -> bool:
        """
        软删除评论

        内容替换为占位文本，树结构（路径、层级、回复）保持不变

        Returns:
            是否实际删除（已删除的评论返回 False）
        """
        result = await session.execute(
            update(Comment)
            .where(and_(Comment.id == comment.id, Comment.is_deleted.is_(False)))
            .values(is_deleted=True, content=TOMBSTONE)
        )
        return result.rowcount > 0

    @staticmethod
    async def page_by_user(
        session: AsyncSession,
        user_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Comment], int]:
        """
        用户发表的评论（最新在前），不含已删除的评论和已下架视频下的评论

        Returns:
            (评论列表, 总数)
        """
        conditions = [
            Comment.user_id == user_id,
            Comment.is_deleted.is_(False),
            Video.active.is_(True),
        ]

        total_result = await session.execute(
            select(func.count())
            .select_from(Comment)
            .join(Video, Comment.video_id == Video.id)
            .where(and_(*conditions))
        )
        total = total_result.scalar() or 0

        result = await session.execute(
            select(Comment)
            .join(Video, Comment.video_id == Video.id)
            .where(and_(*conditions))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total
