"""
Feed 服务

按 Feed 类型组装分页视频列表：

- FOLLOWING / RECENT / HASHTAG 按创建时间倒序，直接在数据库分页
- FOR_YOU / DISCOVER / TRENDING / POPULAR 先取有上限的候选集，
  按当前计数重新打分后在内存中排序再分页

所有排序最后都以 (创建时间, ID) 倒序兜底，静态数据下翻页不会重复或遗漏。
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple, Union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.config.settings import settings
from clipgraph.db.dao import VideoDAO, FollowDAO, UserDAO
from clipgraph.db.models.video import Video
from clipgraph.exceptions import InvalidOperationError, UnavailableError
from clipgraph.models import FeedType, FeedFilters, FeedPage, VideoSummary, UserPage, UserSummary
from clipgraph.services.scoring_service import (
    video_engagement_score,
    video_viral_score,
    video_trending_score,
    video_popularity_score,
)
from clipgraph.utils.clock import Clock, utc_now, to_naive_utc
from clipgraph.utils.hashtags import normalize_hashtag
from clipgraph.utils.pagination import normalize_page, page_meta

ALGORITHM_VERSION = "v1"

TIME_ORDERED_FEEDS = {FeedType.FOLLOWING, FeedType.RECENT, FeedType.HASHTAG}

# 打分类 Feed 的排序分
RANKERS: Dict[FeedType, Callable[[Video, datetime], float]] = {
    FeedType.FOR_YOU: lambda video, now: video_viral_score(video),
    FeedType.DISCOVER: lambda video, now: video_viral_score(video),
    FeedType.TRENDING: video_trending_score,
    FeedType.POPULAR: lambda video, now: video_popularity_score(video),
}


def to_summary(video: Video, rank_score: Optional[float] = None) -> VideoSummary:
    """视频摘要，分数按当前计数重新计算"""
    summary = VideoSummary.model_validate(video)
    return summary.model_copy(update={
        "engagement_score": video_engagement_score(video),
        "viral_score": video_viral_score(video),
        "rank_score": rank_score,
    })


def rank_videos(
    videos: List[Video],
    ranker: Callable[[Video, datetime], float],
    now: datetime
) -> List[Tuple[float, Video]]:
    """按排序分倒序，分数相同按创建时间、ID 倒序"""
    scored = [(ranker(video, now), video) for video in videos]
    scored.sort(key=lambda item: (item[0], item[1].created_at, item[1].id), reverse=True)
    return scored


class FeedService:
    """Feed 服务"""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    def _conditions(
        self,
        feed_type: FeedType,
        viewer_id: Optional[str],
        filters: FeedFilters,
        now: datetime
    ) -> list:
        """组装候选集过滤条件"""
        conditions = VideoDAO.visible_conditions(viewer_id)

        if feed_type == FeedType.FOLLOWING:
            if not viewer_id:
                raise InvalidOperationError("VIEWER_REQUIRED", "FOLLOWING feed requires a viewer")
            conditions.append(VideoDAO.following_condition(viewer_id))

        elif feed_type in (FeedType.FOR_YOU, FeedType.DISCOVER):
            conditions.extend(VideoDAO.not_following_condition(viewer_id))

        elif feed_type == FeedType.TRENDING:
            if filters.since:
                cutoff = to_naive_utc(filters.since)
            else:
                cutoff = now - timedelta(hours=settings.TRENDING_WINDOW_HOURS)
            conditions.append(VideoDAO.created_after_condition(cutoff))

        elif feed_type == FeedType.HASHTAG:
            tag = normalize_hashtag(filters.hashtag or "")
            if not tag:
                raise InvalidOperationError("HASHTAG_REQUIRED", "HASHTAG feed requires a hashtag")
            conditions.append(VideoDAO.hashtag_condition(tag))

        return conditions

    async def get_feed(
        self,
        session: AsyncSession,
        feed_type: Union[FeedType, str],
        viewer_id: Optional[str] = None,
        page: int = 0,
        size: Optional[int] = None,
        filters: Optional[FeedFilters] = None
    ) -> FeedPage:
        """
        获取 Feed 分页

        Args:
            session: 数据库会话
            feed_type: Feed 类型
            viewer_id: 观看者ID（匿名为 None）
            page: 页码（从 0 开始）
            size: 每页数量（截断到 [1, MAX_PAGE_SIZE]）
            filters: 过滤参数

        Returns:
            Feed 分页

        Raises:
            InvalidOperationError: 参数错误
            UnavailableError: 存储不可用（整页失败，不返回部分结果）
        """
        try:
            feed_type = FeedType(feed_type)
        except ValueError:
            raise InvalidOperationError("INVALID_FEED_TYPE", f"Unknown feed type: {feed_type}")

        page, size = normalize_page(page, size)
        filters = filters or FeedFilters()
        now = self.clock()
        conditions = self._conditions(feed_type, viewer_id, filters, now)

        try:
            if feed_type in TIME_ORDERED_FEEDS:
                videos, total = await VideoDAO.page_by_created(
                    session, conditions, limit=size, offset=page * size
                )
                content = [to_summary(video) for video in videos]
            else:
                candidate_limit = min(
                    filters.candidate_limit or settings.FEED_CANDIDATE_LIMIT,
                    settings.FEED_CANDIDATE_LIMIT,
                )
                candidates = await VideoDAO.fetch_candidates(session, conditions, limit=candidate_limit)
                ranked = rank_videos(candidates, RANKERS[feed_type], now)
                total = len(ranked)
                window = ranked[page * size:(page + 1) * size]
                content = [to_summary(video, score) for score, video in window]
        except SQLAlchemyError as e:
            logger.error(f"❌ {feed_type.value} feed failed for viewer {viewer_id}: {e}")
            raise UnavailableError("FEED_UNAVAILABLE", "Feed is temporarily unavailable") from e

        return FeedPage(
            content=content,
            feed_type=feed_type,
            algorithm_version=ALGORITHM_VERSION,
            **page_meta(page, size, total),
        )

    async def suggested_users(
        self,
        session: AsyncSession,
        viewer_id: Optional[str] = None,
        page: int = 0,
        size: Optional[int] = None
    ) -> UserPage:
        """
        推荐关注用户

        排除已关注的用户和自己，按粉丝数降序

        Args:
            session: 数据库会话
            viewer_id: 当前用户ID
            page: 页码
            size: 每页数量

        Returns:
            用户分页
        """
        page, size = normalize_page(page, size)

        try:
            excluded = set()
            if viewer_id:
                excluded = await FollowDAO.get_following_ids(session, viewer_id)
                excluded.add(viewer_id)

            users, total = await UserDAO.get_suggested(
                session, excluded, limit=size, offset=page * size
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Suggested users failed for viewer {viewer_id}: {e}")
            raise UnavailableError("SUGGESTIONS_UNAVAILABLE", "Suggestions are temporarily unavailable") from e

        return UserPage(
            content=[UserSummary.model_validate(user) for user in users],
            **page_meta(page, size, total),
        )


# 全局 Feed 服务实例
feed_service = FeedService()
