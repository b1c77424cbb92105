"""
评论服务

处理评论树（路径枚举）相关业务逻辑
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.config.settings import settings
from clipgraph.db.dao import CommentDAO, CounterDAO
from clipgraph.exceptions import InvalidOperationError
from clipgraph.models import CommentModel, CommentThread, CommentThreadPage, CommentDeleteResult, CommentPage
from clipgraph.services.engagement_service import require_user, require_video, require_comment
from clipgraph.utils.pagination import normalize_page, page_meta


class CommentService:
    """评论服务"""

    @staticmethod
    def _validate_content(content: Optional[str]) -> str:
        """验证评论内容长度（去除首尾空白后 1 ~ COMMENT_MAX_LENGTH 字符）"""
        content = (content or "").strip()
        if not content or len(content) > settings.COMMENT_MAX_LENGTH:
            raise InvalidOperationError(
                "INVALID_CONTENT",
                f"Comment content must be 1-{settings.COMMENT_MAX_LENGTH} characters"
            )
        return content

    @staticmethod
    async def add_comment(
        session: AsyncSession,
        video_id: str,
        user_id: str,
        content: str
    ) -> CommentModel:
        """
        发表顶级评论

        Args:
            session: 数据库会话
            video_id: 视频ID
            user_id: 用户ID
            content: 评论内容

        Returns:
            新创建的评论
        """
        content = CommentService._validate_content(content)
        await require_user(session, user_id)
        await require_video(session, video_id)

        comment = await CommentDAO.create(session, video_id, user_id, content)
        await CounterDAO.increment(session, "video", video_id, "comments_count")

        logger.debug(f"💬 {user_id} commented {comment.id} on {video_id}")
        return CommentModel.model_validate(comment)

    @staticmethod
    async def add_reply(
        session: AsyncSession,
        parent_id: str,
        user_id: str,
        content: str
    ) -> CommentModel:
        """
        回复评论

        新评论路径 = 父评论路径 + 父评论ID + "."，层级 = 父评论层级 + 1。
        已删除的父评论仍可回复（保持讨论结构）。

        Args:
            session: 数据库会话
            parent_id: 父评论ID
            user_id: 用户ID
            content: 回复内容

        Returns:
            新创建的回复
        """
        content = CommentService._validate_content(content)
        await require_user(session, user_id)
        parent = await require_comment(session, parent_id)
        await require_video(session, parent.video_id)

        reply = await CommentDAO.create(session, parent.video_id, user_id, content, parent=parent)
        # 行锁顺序：评论 -> 视频
        await CounterDAO.increment(session, "comment", parent.id, "replies_count")
        await CounterDAO.increment(session, "video", parent.video_id, "comments_count")

        logger.debug(f"💬 {user_id} replied {reply.id} under {parent.id} (depth {reply.depth})")
        return CommentModel.model_validate(reply)

    @staticmethod
    async def get_comment(session: AsyncSession, comment_id: str) -> CommentModel:
        """获取单条评论"""
        comment = await require_comment(session, comment_id)
        return CommentModel.model_validate(comment)

    @staticmethod
    async def delete_comment(
        session: AsyncSession,
        comment_id: str
    ) -> CommentDeleteResult:
        """
        删除评论（软删除）

        只减少本条评论对应的视频评论数和父评论回复数，
        子评论不删除、不移动，计数也不变。
        权限校验由调用方负责。

        Args:
            session: 数据库会话
            comment_id: 评论ID

        Returns:
            删除结果
        """
        comment = await require_comment(session, comment_id)

        deleted = await CommentDAO.soft_delete(session, comment)
        if deleted:
            # 行锁顺序：本评论 -> 父评论 -> 视频
            if comment.parent_id:
                await CounterDAO.decrement(session, "comment", comment.parent_id, "replies_count")
            await CounterDAO.decrement(session, "video", comment.video_id, "comments_count")
            logger.debug(f"🗑️ Comment {comment_id} deleted")

        return CommentDeleteResult(
            comment_id=comment_id,
            deleted=deleted,
            comments_count=await CounterDAO.get(session, "video", comment.video_id, "comments_count"),
        )

    @staticmethod
    async def list_thread(
        session: AsyncSession,
        video_id: str,
        page: int = 0,
        size: Optional[int] = None,
        with_replies: bool = True
    ) -> CommentThreadPage:
        """
        获取视频评论列表

        - 顶级评论按时间倒序（最新的讨论在前）
        - 每条顶级评论附带前 N 条直接回复，按时间正序
        - 已删除的评论以占位内容返回，保持结构

        Args:
            session: 数据库会话
            video_id: 视频ID
            page: 页码（从 0 开始）
            size: 每页数量
            with_replies: 是否展开回复

        Returns:
            评论分页
        """
        await require_video(session, video_id)
        page, size = normalize_page(page, size)

        total = await CommentDAO.count_top_level(session, video_id)
        comments = await CommentDAO.get_top_level(session, video_id, limit=size, offset=page * size)

        threads = []
        for comment in comments:
            thread = CommentThread.model_validate(comment)
            if with_replies:
                replies = await CommentDAO.get_replies(
                    session, comment.id, limit=settings.COMMENT_REPLY_PREVIEW
                )
                thread.replies = [CommentModel.model_validate(reply) for reply in replies]
            threads.append(thread)

        return CommentThreadPage(content=threads, **page_meta(page, size, total))

    @staticmethod
    async def list_replies(session: AsyncSession, comment_id: str) -> List[CommentModel]:
        """获取评论的全部直接回复（按时间正序）"""
        await require_comment(session, comment_id)
        replies = await CommentDAO.get_replies(session, comment_id)
        return [CommentModel.model_validate(reply) for reply in replies]

    @staticmethod
    async def list_subtree(session: AsyncSession, comment_id: str) -> List[CommentModel]:
        """获取评论的全部后代（先序遍历顺序）"""
        comment = await require_comment(session, comment_id)
        descendants = await CommentDAO.get_subtree(session, comment)
        return [CommentModel.model_validate(item) for item in descendants]

    @staticmethod
    async def count_active(session: AsyncSession, video_id: str) -> int:
        """统计视频未删除的评论数"""
        await require_video(session, video_id)
        return await CommentDAO.count_active(session, video_id)

    @staticmethod
    async def list_user_comments(
        session: AsyncSession,
        user_id: str,
        page: Optional[int] = 0,
        size: Optional[int] = None
    ) -> CommentPage:
        """用户发表的评论（最新在前），已删除的评论和已下架视频下的评论不返回"""
        page, size = normalize_page(page, size)
        await require_user(session, user_id)

        comments, total = await CommentDAO.page_by_user(session, user_id, limit=size, offset=page * size)
        return CommentPage(
            content=[CommentModel.model_validate(comment) for comment in comments],
            **page_meta(page, size, total),
        )


# 全局评论服务实例
comment_service = CommentService()
