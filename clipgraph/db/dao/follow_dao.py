"""
关注关系数据访问对象
"""

from typing import Set
from sqlalchemy import select, delete, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.follow import UserFollow
from clipgraph.db.dao.base_dao import insert_unique


class FollowDAO:
    """关注关系 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        follower_id: str,
        following_id: str
    ) -> bool:
        """
        创建关注关系

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            following_id: 被关注者ID

        Returns:
            是否创建成功（False 表示唯一约束冲突，关注已存在）
        """
        follow = UserFollow(
            follower_id=follower_id,
            following_id=following_id,
        )
        return await insert_unique(session, follow)

    @staticmethod
    async def delete(
        session: AsyncSession,
        follower_id: str,
        following_id: str
    ) -> bool:
        """
        删除关注关系

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            following_id: 被关注者ID

        Returns:
            是否删除了记录
        """
        result = await session.execute(
            delete(UserFollow).where(
                and_(
                    UserFollow.follower_id == follower_id,
                    UserFollow.following_id == following_id
                )
            )
        )
        return result.rowcount > 0

    @staticmethod
    async def is_following(
        session: AsyncSession,
        follower_id: str,
        following_id: str
    ) -> bool:
        """
        检查是否已关注

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            following_id: 被关注者ID

        Returns:
            是否已关注
        """
        result = await session.execute(
            select(func.count(UserFollow.id)).where(
                and_(
                    UserFollow.follower_id == follower_id,
                    UserFollow.following_id == following_id
                )
            )
        )
        count = result.scalar()
        return count > 0

    @staticmethod
    def following_ids_query(user_id: str):
        """用户关注的人的ID子查询"""
        return select(UserFollow.following_id).where(UserFollow.follower_id == user_id)

    @staticmethod
    async def get_following_ids(session: AsyncSession, user_id: str) -> Set[str]:
        """获取用户关注的所有用户ID"""
        result = await session.execute(FollowDAO.following_ids_query(user_id))
        return set(result.scalars().all())
