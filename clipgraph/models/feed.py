"""
Feed 相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum

from .response import PageMeta


class FeedType(str, Enum):
    """Feed 类型"""
    FOLLOWING = "FOLLOWING"
    FOR_YOU = "FOR_YOU"
    DISCOVER = "DISCOVER"
    TRENDING = "TRENDING"
    POPULAR = "POPULAR"
    RECENT = "RECENT"
    HASHTAG = "HASHTAG"


class FeedFilters(BaseModel):
    """Feed 过滤参数"""
    hashtag: Optional[str] = Field(None, description="话题标签（HASHTAG 必填）")
    since: Optional[datetime] = Field(None, description="TRENDING 的起始时间（默认按配置窗口）")
    candidate_limit: Optional[int] = Field(None, ge=1, description="打分类 Feed 的候选集上限")


class VideoSummary(BaseModel):
    """Feed 中的视频摘要（分数为本次请求重新计算的结果）"""
    id: str
    user_id: str
    caption: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: int = 0
    is_private: bool = False
    views_count: int = 0
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    saves_count: int = 0
    engagement_score: float = 0.0
    viral_score: float = 0.0
    rank_score: Optional[float] = Field(None, description="本 Feed 的排序分（按时间排序的 Feed 为空）")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedPage(PageMeta):
    """Feed 分页"""
    content: List[VideoSummary] = Field(default_factory=list)
    feed_type: FeedType
    algorithm_version: str


class VideoPage(PageMeta):
    """视频列表分页（用户作品、用户点赞过的视频）"""
    content: List[VideoSummary] = Field(default_factory=list)
