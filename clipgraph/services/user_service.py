"""
用户服务

注册侧的图写入：创建用户、注销用户；用户搜索、视频点赞者列表
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.db.dao import UserDAO
from clipgraph.exceptions import ConflictError, InvalidOperationError
from clipgraph.models import UserSummary, UserPage
from clipgraph.services.engagement_service import require_user, require_video
from clipgraph.utils.clock import Clock, utc_now
from clipgraph.utils.pagination import normalize_page, page_meta


class UserService:
    """用户服务"""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    async def create_user(
        self,
        session: AsyncSession,
        username: str,
        display_name: Optional[str] = None,
        is_private: bool = False
    ) -> UserSummary:
        """
        创建用户

        Args:
            session: 数据库会话
            username: 用户名（唯一）
            display_name: 昵称
            is_private: 是否私密账号

        Returns:
            用户摘要
        """
        if await UserDAO.get_by_username(session, username):
            raise ConflictError("USERNAME_TAKEN", f"Username {username} is already taken")

        user = await UserDAO.create(
            session, username, display_name=display_name, is_private=is_private,
            created_at=self.clock(),
        )
        logger.info(f"👤 User {user.id} created")
        return UserSummary.model_validate(user)

    async def get_user(self, session: AsyncSession, user_id: str) -> UserSummary:
        """获取有效用户"""
        user = await require_user(session, user_id)
        return UserSummary.model_validate(user)

    async def soft_delete_user(self, session: AsyncSession, user_id: str) -> UserSummary:
        """
        注销用户

        仅标记失效并打散用户名，不删除任何关系或计数
        """
        user = await require_user(session, user_id)
        await UserDAO.soft_delete(session, user, self.clock())
        logger.info(f"👋 User {user_id} deactivated")
        return UserSummary.model_validate(user)

    async def search_users(
        self,
        session: AsyncSession,
        query: str,
        page: Optional[int] = 0,
        size: Optional[int] = None
    ) -> UserPage:
        """
        按用户名搜索有效用户，粉丝多的在前

        Args:
            session: 数据库会话
            query: 用户名片段（不区分大小写）
            page: 页码（从 0 开始）
            size: 每页数量

        Returns:
            用户分页
        """
        query = (query or "").strip()
        if not query:
            raise InvalidOperationError("INVALID_QUERY", "Search query cannot be empty")

        page, size = normalize_page(page, size)
        users, total = await UserDAO.search(session, query, limit=size, offset=page * size)
        return UserPage(
            content=[UserSummary.model_validate(user) for user in users],
            **page_meta(page, size, total),
        )

    async def list_likers(
        self,
        session: AsyncSession,
        video_id: str,
        page: Optional[int] = 0,
        size: Optional[int] = None
    ) -> UserPage:
        """点赞了视频的有效用户（最近点赞的在前）"""
        page, size = normalize_page(page, size)
        await require_video(session, video_id)

        users, total = await UserDAO.page_likers(session, video_id, limit=size, offset=page * size)
        return UserPage(
            content=[UserSummary.model_validate(user) for user in users],
            **page_meta(page, size, total),
        )


# 全局用户服务实例
user_service = UserService()
