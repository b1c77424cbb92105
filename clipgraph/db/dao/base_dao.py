"""
DAO 公共工具
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger


async def insert_unique(session: AsyncSession, instance) -> bool:
    """
    在 SAVEPOINT 中插入带唯一约束的记录

    唯一约束冲突时只回滚该 SAVEPOINT，外层事务可继续使用

    Args:
        session: 数据库会话
        instance: 待插入的 ORM 对象

    Returns:
        是否插入成功（False 表示记录已被并发请求插入）
    """
    try:
        async with session.begin_nested():
            session.add(instance)
    except IntegrityError as e:
        logger.debug(f"Unique constraint rejected {type(instance).__name__}: {e.orig}")
        return False
    return True
