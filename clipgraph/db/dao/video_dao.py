"""
视频数据访问对象
"""

from datetime import datetime
from typing import Optional, List, Tuple, Iterable
from sqlalchemy import select, update, delete, func, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from clipgraph.db.models.user import User
from clipgraph.db.models.video import Video, VideoHashtag
from clipgraph.db.models.like import VideoLike
from clipgraph.db.dao.follow_dao import FollowDAO
from clipgraph.utils.hashtags import extract_hashtags
from clipgraph.utils.id_generator import generate_video_id


class VideoDAO:
    """视频 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        user_id: str,
        caption: Optional[str] = None,
        video_url: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        duration: int = 0,
        is_private: bool = False,
        review_status: str = "APPROVED",
        video_id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> Video:
        """
        创建视频，同时根据文案写入话题标签

        Args:
            session: 数据库会话
            user_id: 发布者ID
            caption: 文案
            video_url: 播放地址
            thumbnail_url: 封面地址
            duration: 时长（秒）
            is_private: 是否私密
            review_status: 审核状态
            video_id: 指定ID（默认自动生成）
            created_at: 创建时间（默认当前时间）

        Returns:
            Video: 新创建的视频对象
        """
        video = Video(
            id=video_id or generate_video_id(),
            user_id=user_id,
            caption=caption,
            video_url=video_url,
            thumbnail_url=thumbnail_url,
            duration=duration,
            is_private=is_private,
            active=True,
            review_status=review_status,
            views_count=0,
            likes_count=0,
            comments_count=0,
            shares_count=0,
            saves_count=0,
            engagement_score=0.0,
            viral_score=0.0,
        )
        if created_at is not None:
            video.created_at = created_at

        session.add(video)
        await session.flush()

        await VideoDAO.replace_hashtags(session, video.id, extract_hashtags(caption))

        return video

    @staticmethod
    async def get_by_id(session: AsyncSession, video_id: str) -> Optional[Video]:
        """根据ID获取视频"""
        result = await session.execute(
            select(Video).where(Video.id == video_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_active_by_id(session: AsyncSession, video_id: str) -> Optional[Video]:
        """根据ID获取有效视频（已删除返回 None）"""
        result = await session.execute(
            select(Video).where(and_(Video.id == video_id, Video.active.is_(True)))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def update_caption(session: AsyncSession, video: Video, caption: Optional[str]) -> List[str]:
        """
        更新文案并重建话题标签

        Returns:
            新的话题标签列表
        """
        video.caption = caption
        await session.flush()

        tags = extract_hashtags(caption)
        await VideoDAO.replace_hashtags(session, video.id, tags)
        return tags

    @staticmethod
    async def replace_hashtags(session: AsyncSession, video_id: str, tags: Iterable[str]):
        """用新标签集合替换视频的话题标签"""
        await session.execute(
            delete(VideoHashtag).where(VideoHashtag.video_id == video_id)
        )
        for tag in tags:
            session.add(VideoHashtag(video_id=video_id, hashtag=tag))
        await session.flush()

    @staticmethod
    async def get_hashtags(session: AsyncSession, video_id: str) -> List[str]:
        """获取视频的话题标签"""
        result = await session.execute(
            select(VideoHashtag.hashtag)
            .where(VideoHashtag.video_id == video_id)
            .order_by(VideoHashtag.hashtag.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def soft_delete(session: AsyncSession, video: Video) -> bool:
        """
        下架视频（软删除），移除播放地址

        Returns:
            是否实际下架（已下架返回 False）
        """
        result = await session.execute(
            update(Video)
            .where(and_(Video.id == video.id, Video.active.is_(True)))
            .values(active=False, video_url=None)
        )
        return result.rowcount > 0

    @staticmethod
    async def update_scores(
        session: AsyncSession,
        video: Video,
        engagement_score: float,
        viral_score: float,
        now: datetime
    ) -> Video:
        """写入分数缓存"""
        video.engagement_score = engagement_score
        video.viral_score = viral_score
        video.scores_updated_at = now
        await session.flush()
        return video

    @staticmethod
    async def get_recently_updated(
        session: AsyncSession,
        since: datetime,
        limit: int = 500
    ) -> List[Video]:
        """获取指定时间后有变更的有效视频"""
        result = await session.execute(
            select(Video)
            .where(and_(Video.active.is_(True), Video.updated_at >= since))
            .order_by(Video.updated_at.desc(), Video.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ==================== Feed 查询 ====================

    @staticmethod
    def visible_conditions(viewer_id: Optional[str] = None) -> list:
        """
        Feed 可见性过滤条件

        视频有效、审核通过、作者有效，且非私密（或私密但为观看者本人的视频）
        """
        conditions = [
            Video.active.is_(True),
            Video.review_status == "APPROVED",
            User.active.is_(True),
        ]
        if viewer_id:
            conditions.append(or_(Video.is_private.is_(False), Video.user_id == viewer_id))
        else:
            conditions.append(Video.is_private.is_(False))
        return conditions

    @staticmethod
    def owner_conditions(user_id: str) -> list:
        """作者本人的视频：未下架即可见（含私密、未审核通过）"""
        return [Video.active.is_(True), Video.user_id == user_id]

    @staticmethod
    def uploaded_by_condition(user_id: str):
        """发布者为 user_id"""
        return Video.user_id == user_id

    @staticmethod
    def following_condition(viewer_id: str):
        """作者在观看者关注列表中"""
        return Video.user_id.in_(FollowDAO.following_ids_query(viewer_id))

    @staticmethod
    def not_following_condition(viewer_id: Optional[str]) -> list:
        """作者不在观看者关注列表中，且不是观看者本人"""
        if not viewer_id:
            return []
        return [
            Video.user_id.notin_(FollowDAO.following_ids_query(viewer_id)),
            Video.user_id != viewer_id,
        ]

    @staticmethod
    def hashtag_condition(tag: str):
        """话题标签包含 tag"""
        return Video.id.in_(
            select(VideoHashtag.video_id).where(VideoHashtag.hashtag == tag)
        )

    @staticmethod
    def created_after_condition(cutoff: datetime):
        """创建时间晚于 cutoff"""
        return Video.created_at > cutoff

    @staticmethod
    async def page_by_created(
        session: AsyncSession,
        conditions: list,
        limit: int,
        offset: int
    ) -> Tuple[List[Video], int]:
        """
        按创建时间倒序分页查询

        Returns:
            (视频列表, 总数)
        """
        count_query = (
            select(func.count())
            .select_from(Video)
            .join(User, Video.user_id == User.id)
            .where(and_(*conditions))
        )
        total_result = await session.execute(count_query)
        total = total_result.scalar() or 0

        result = await session.execute(
            select(Video)
            .join(User, Video.user_id == User.id)
            .where(and_(*conditions))
            .order_by(Video.created_at.desc(), Video.id.desc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def fetch_candidates(
        session: AsyncSession,
        conditions: list,
        limit: int
    ) -> List[Video]:
        """获取候选视频（最新的 limit 条），供内存中打分排序"""
        result = await session.execute(
            select(Video)
            .join(User, Video.user_id == User.id)
            .where(and_(*conditions))
            .order_by(Video.created_at.desc(), Video.id.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    async def page_liked_by(
        session: AsyncSession,
        user_id: str,
        conditions: list,
        limit: int,
        offset: int
    ) -> Tuple[List[Video], int]:
        """
        用户点赞过的视频，按点赞时间倒序分页

        Args:
            session: 数据库会话
            user_id: 点赞用户ID
            conditions: 可见性过滤条件
            limit: 每页数量
            offset: 偏移量

        Returns:
            (视频列表, 总数)
        """
        conditions = conditions + [VideoLike.user_id == user_id]

        total_result = await session.execute(
            select(func.count())
            .select_from(VideoLike)
            .join(Video, VideoLike.video_id == Video.id)
            .join(User, Video.user_id == User.id)
            .where(and_(*conditions))
        )
        total = total_result.scalar() or 0

        result = await session.execute(
            select(Video)
            .join(VideoLike, VideoLike.video_id == Video.id)
            .join(User, Video.user_id == User.id)
            .where(and_(*conditions))
            .order_by(VideoLike.created_at.desc(), VideoLike.id.desc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all()), total
