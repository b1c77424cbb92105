"""
数据库会话管理

提供数据库会话的便捷访问
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db import base


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话的上下文管理器（用于非 FastAPI 上下文，如定时重算分数）

    使用示例：
    ```python
    async with get_session() as session:
        await scoring_service.refresh_recent(session, since)
    ```

    Yields:
        AsyncSession: 数据库会话
    """
    if not base.AsyncSessionLocal:
        raise RuntimeError("Database not initialized")

    async with base.AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
