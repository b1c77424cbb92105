"""
用户数据访问对象
"""

from datetime import datetime
from typing import Optional, List, Iterable, Tuple
from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.user import User
from clipgraph.db.models.like import VideoLike
from clipgraph.utils.id_generator import generate_user_id


class UserDAO:
    """用户 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        username: str,
        display_name: Optional[str] = None,
        is_private: bool = False,
        user_id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> User:
        """
        创建用户

        Args:
            session: 数据库会话
            username: 用户名
            display_name: 昵称
            is_private: 是否私密账号
            user_id: 指定ID（默认自动生成）
            created_at: 创建时间（默认当前时间）

        Returns:
            User: 新创建的用户对象
        """
        user = User(
            id=user_id or generate_user_id(),
            username=username,
            display_name=display_name,
            is_private=is_private,
            active=True,
            followers_count=0,
            following_count=0,
            videos_count=0,
            total_likes_received=0,
        )
        if created_at is not None:
            user.created_at = created_at

        session.add(user)
        await session.flush()

        return user

    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
        """根据ID获取用户"""
        result = await session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_active_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
        """根据ID获取有效用户（已注销返回 None）"""
        result = await session.execute(
            select(User).where(and_(User.id == user_id, User.active.is_(True)))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_username(session: AsyncSession, username: str) -> Optional[User]:
        """根据用户名获取用户"""
        result = await session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def soft_delete(session: AsyncSession, user: User, now: datetime) -> User:
        """
        注销用户（软删除）

        用户名打散释放唯一约束，关系数据和计数保留
        """
        user.active = False
        user.username = f"deleted_{user.id}_{int(now.timestamp() * 1000)}"
        user.deleted_at = now
        await session.flush()
        return user

    @staticmethod
    async def get_suggested(
        session: AsyncSession,
        excluded_ids: Iterable[str],
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[User], int]:
        """
        推荐关注用户：有效、非私密、不在排除集合中，按粉丝数降序

        Args:
            session: 数据库会话
            excluded_ids: 排除的用户ID（已关注 + 自己）
            limit: 每页数量
            offset: 偏移量

        Returns:
            (用户列表, 总数)
        """
        conditions = [User.active.is_(True), User.is_private.is_(False)]
        excluded = list(excluded_ids)
        if excluded:
            conditions.append(User.id.notin_(excluded))

        total_result = await session.execute(
            select(func.count()).select_from(User).where(and_(*conditions))
        )
        total = total_result.scalar() or 0

        result = await session.execute(
            select(User)
            .where(and_(*conditions))
            .order_by(User.followers_count.desc(), User.created_at.asc(), User.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def search(
        session: AsyncSession,
        query: str,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[User], int]:
        """
        按用户名子串搜索有效用户（不区分大小写），按粉丝数降序

        Returns:
            (用户列表, 总数)
        """
        conditions = [
            User.active.is_(True),
            func.lower(User.username).contains(query.lower(), autoescape=True),
        ]

        total_result = await session.execute(
            select(func.count()).select_from(User).where(and_(*conditions))
        )
        total = total_result.scalar() or 0

        result = await session.execute(
            select(User)
            .where(and_(*conditions))
            .order_by(User.followers_count.desc(), User.created_at.asc(), User.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def page_likers(
        session: AsyncSession,
        video_id: str,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[User], int]:
        """
        点赞了视频的有效用户，按点赞时间倒序

        Returns:
            (用户列表, 总数)
        """
        conditions = [VideoLike.video_id == video_id, User.active.is_(True)]

        total_result = await session.execute(
            select(func.count())
            .select_from(VideoLike)
            .join(User, VideoLike.user_id == User.id)
            .where(and_(*conditions))
        )
        total = total_result.scalar() or 0

        result = await session.execute(
            select(User)
            .join(VideoLike, VideoLike.user_id == User.id)
            .where(and_(*conditions))
            .order_by(VideoLike.created_at.desc(), VideoLike.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total
