"""
计数器数据访问对象

所有冗余计数都通过单条 UPDATE 语句在数据库端原子增减，
减操作带 `counter >= n` 条件，不会减到负数。

同一事务内更新多行计数时按固定顺序加锁：
评论（子评论先于父评论） -> 视频 -> 用户（多个用户按ID升序）
"""

from typing import Dict, Tuple
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.user import User
from clipgraph.db.models.video import Video
from clipgraph.db.models.comment import Comment
from clipgraph.exceptions import InvalidOperationError


# entity_type -> (模型, 允许的计数字段)
COUNTERS: Dict[str, Tuple[type, frozenset]] = {
    "user": (User, frozenset({
        "followers_count", "following_count", "videos_count", "total_likes_received",
    })),
    "video": (Video, frozenset({
        "views_count", "likes_count", "comments_count", "shares_count", "saves_count",
    })),
    "comment": (Comment, frozenset({"likes_count", "replies_count"})),
}


class CounterDAO:
    """计数器 DAO"""

    @staticmethod
    def _resolve(entity_type: str, counter: str):
        entry = COUNTERS.get(entity_type)
        if entry is None:
            raise InvalidOperationError("UNKNOWN_ENTITY", f"Unknown entity type: {entity_type}")

        model, counters = entry
        if counter not in counters:
            raise InvalidOperationError("UNKNOWN_COUNTER", f"Unknown counter: {entity_type}.{counter}")

        return model, getattr(model, counter)

    @staticmethod
    async def increment(
        session: AsyncSession,
        entity_type: str,
        entity_id: str,
        counter: str,
        amount: int = 1
    ) -> bool:
        """
        计数器原子加 amount

        Returns:
            是否命中记录
        """
        model, column = CounterDAO._resolve(entity_type, counter)
        result = await session.execute(
            update(model)
            .where(model.id == entity_id)
            .values({counter: column + amount})
        )
        return result.rowcount > 0

    @staticmethod
    async def decrement(
        session: AsyncSession,
        entity_type: str,
        entity_id: str,
        counter: str,
        amount: int = 1
    ) -> bool:
        """
        计数器原子减 amount（不低于 0）

        Returns:
            是否实际减少；计数不足时不修改并返回 False
        """
        model, column = CounterDAO._resolve(entity_type, counter)
        result = await session.execute(
            update(model)
            .where(model.id == entity_id, column >= amount)
            .values({counter: column - amount})
        )
        return result.rowcount > 0

    @staticmethod
    async def get(
        session: AsyncSession,
        entity_type: str,
        entity_id: str,
        counter: str
    ) -> int:
        """读取数据库中的当前计数（记录不存在时为 0）"""
        model, column = CounterDAO._resolve(entity_type, counter)
        result = await session.execute(
            select(column).where(model.id == entity_id)
        )
        return result.scalar_one_or_none() or 0
