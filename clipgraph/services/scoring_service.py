"""
打分服务

互动分、传播分、热门分都是计数 + 创建时间 + 当前时间的纯函数。
排序时总是重新计算，数据库中的分数列只是缓存。
"""

import math
from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from clipgraph.db.dao import VideoDAO
from clipgraph.db.models.video import Video
from clipgraph.utils.clock import Clock, utc_now, hours_between

# 互动权重
LIKE_WEIGHT = 1.0
COMMENT_WEIGHT = 2.0
SHARE_WEIGHT = 3.0
SAVE_WEIGHT = 2.5


def engagement_score(views: int, likes: int, comments: int, shares: int, saves: int) -> float:
    """
    互动分：单次播放的加权互动率

    播放数为 0 时为 0
    """
    if views <= 0:
        return 0.0
    weighted = (
        likes * LIKE_WEIGHT
        + comments * COMMENT_WEIGHT
        + shares * SHARE_WEIGHT
        + saves * SAVE_WEIGHT
    )
    return weighted / views


def viral_score(views: int, likes: int, comments: int, shares: int, saves: int) -> float:
    """传播分 = 互动分 * ln(播放数 + 1)"""
    return engagement_score(views, likes, comments, shares, saves) * math.log(views + 1)


def trending_score(likes: int, comments: int, shares: int, created_at: datetime, now: datetime) -> float:
    """热门分 = (点赞*1 + 评论*2 + 分享*3) / (发布小时数 + 1)"""
    weighted = likes * LIKE_WEIGHT + comments * COMMENT_WEIGHT + shares * SHARE_WEIGHT
    return weighted / (hours_between(created_at, now) + 1)


def video_engagement_score(video: Video) -> float:
    return engagement_score(
        video.views_count, video.likes_count, video.comments_count,
        video.shares_count, video.saves_count,
    )


def video_viral_score(video: Video) -> float:
    return viral_score(
        video.views_count, video.likes_count, video.comments_count,
        video.shares_count, video.saves_count,
    )


def video_trending_score(video: Video, now: datetime) -> float:
    return trending_score(
        video.likes_count, video.comments_count, video.shares_count, video.created_at, now,
    )


def video_popularity_score(video: Video) -> float:
    """全时段热度 = 互动分 * 播放数"""
    return video_engagement_score(video) * video.views_count


class ScoringService:
    """分数缓存刷新"""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    async def refresh_scores(
        self,
        session: AsyncSession,
        videos: Iterable[Video],
        now: Optional[datetime] = None
    ) -> List[Video]:
        """
        按当前计数重算并写入视频的分数缓存

        Args:
            session: 数据库会话
            videos: 需要刷新的视频

        Returns:
            已刷新的视频列表
        """
        now = now or self.clock()
        refreshed = []
        for video in videos:
            # 读取数据库最新计数，避免使用会话中的旧值
            await session.refresh(video)
            await VideoDAO.update_scores(
                session, video,
                video_engagement_score(video),
                video_viral_score(video),
                now,
            )
            refreshed.append(video)
        return refreshed

    async def refresh_recent(
        self,
        session: AsyncSession,
        since: datetime,
        limit: int = 500
    ) -> int:
        """
        重算指定时间后有变更的视频分数（供定时任务调用）

        Returns:
            刷新的视频数量
        """
        videos = await VideoDAO.get_recently_updated(session, since, limit)
        refreshed = await self.refresh_scores(session, videos)
        logger.info(f"🔁 Refreshed scores for {len(refreshed)} videos updated since {since.isoformat()}")
        return len(refreshed)


# 全局打分服务实例
scoring_service = ScoringService()
