"""
视频服务

视频发布、文案修改、审核状态、下架，用户作品和点赞列表
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.db.dao import VideoDAO, CounterDAO
from clipgraph.db.models.video import Video
from clipgraph.exceptions import NotFoundError
from clipgraph.models import VideoCreate, VideoModel, ReviewStatus, VideoPage
from clipgraph.services.engagement_service import require_user, require_video
from clipgraph.services.feed_service import to_summary
from clipgraph.utils.clock import Clock, utc_now
from clipgraph.utils.pagination import normalize_page, page_meta


class VideoService:
    """视频服务"""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    @staticmethod
    async def _to_model(session: AsyncSession, video: Video) -> VideoModel:
        model = VideoModel.model_validate(video)
        model.hashtags = await VideoDAO.get_hashtags(session, video.id)
        return model

    async def create_video(
        self,
        session: AsyncSession,
        user_id: str,
        data: VideoCreate,
        review_status: ReviewStatus = ReviewStatus.APPROVED
    ) -> VideoModel:
        """
        发布视频

        话题标签由文案解析，作者视频数 +1

        Args:
            session: 数据库会话
            user_id: 作者ID
            data: 视频信息
            review_status: 初始审核状态

        Returns:
            视频详情
        """
        await require_user(session, user_id)

        video = await VideoDAO.create(
            session,
            user_id=user_id,
            caption=data.caption,
            video_url=data.video_url,
            thumbnail_url=data.thumbnail_url,
            duration=data.duration,
            is_private=data.is_private,
            review_status=ReviewStatus(review_status).value,
            created_at=self.clock(),
        )
        await CounterDAO.increment(session, "user", user_id, "videos_count")

        logger.info(f"🎬 Video {video.id} published by {user_id}")
        return await self._to_model(session, video)

    async def get_video(self, session: AsyncSession, video_id: str) -> VideoModel:
        """获取有效视频"""
        video = await require_video(session, video_id)
        return await self._to_model(session, video)

    async def update_caption(
        self,
        session: AsyncSession,
        video_id: str,
        caption: Optional[str]
    ) -> VideoModel:
        """修改文案，话题标签随之重建"""
        video = await require_video(session, video_id)
        await VideoDAO.update_caption(session, video, caption)
        return await self._to_model(session, video)

    async def set_review_status(
        self,
        session: AsyncSession,
        video_id: str,
        status: ReviewStatus
    ) -> VideoModel:
        """更新审核状态（非 APPROVED 的视频不进入任何 Feed）"""
        video = await require_video(session, video_id)
        video.review_status = ReviewStatus(status).value
        await session.flush()
        return await self._to_model(session, video)

    async def soft_delete_video(self, session: AsyncSession, video_id: str) -> bool:
        """
        下架视频

        点赞、评论等关系保留；作者视频数 -1

        Returns:
            是否实际下架
        """
        video = await VideoDAO.get_by_id(session, video_id)
        if not video:
            raise NotFoundError("VIDEO_NOT_FOUND", f"Video {video_id} not found")

        deleted = await VideoDAO.soft_delete(session, video)
        if deleted:
            await CounterDAO.decrement(session, "user", video.user_id, "videos_count")
            logger.info(f"🗑️ Video {video_id} deleted")
        return deleted

    async def list_user_videos(
        self,
        session: AsyncSession,
        user_id: str,
        viewer_id: Optional[str] = None,
        page: Optional[int] = 0,
        size: Optional[int] = None
    ) -> VideoPage:
        """
        用户发布的视频（最新在前）

        作者本人可以看到自己所有未下架的视频；其他人只能看到进入 Feed 的视频

        Args:
            session: 数据库会话
            user_id: 作者ID
            viewer_id: 当前用户ID（未登录为空）
            page: 页码（从 0 开始）
            size: 每页数量

        Returns:
            视频分页
        """
        page, size = normalize_page(page, size)
        await require_user(session, user_id)

        if viewer_id == user_id:
            conditions = VideoDAO.owner_conditions(user_id)
        else:
            conditions = VideoDAO.visible_conditions(viewer_id) + [VideoDAO.uploaded_by_condition(user_id)]

        videos, total = await VideoDAO.page_by_created(session, conditions, limit=size, offset=page * size)
        return VideoPage(
            content=[to_summary(video) for video in videos],
            **page_meta(page, size, total),
        )

    async def list_liked_videos(
        self,
        session: AsyncSession,
        user_id: str,
        viewer_id: Optional[str] = None,
        page: Optional[int] = 0,
        size: Optional[int] = None
    ) -> VideoPage:
        """用户点赞过的视频（按点赞时间倒序），只包含当前用户可见的视频"""
        page, size = normalize_page(page, size)
        await require_user(session, user_id)

        conditions = VideoDAO.visible_conditions(viewer_id)
        videos, total = await VideoDAO.page_liked_by(session, user_id, conditions, limit=size, offset=page * size)
        return VideoPage(
            content=[to_summary(video) for video in videos],
            **page_meta(page, size, total),
        )


# 全局视频服务实例
video_service = VideoService()
