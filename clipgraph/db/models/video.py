"""
视频表 ORM 模型
"""

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, TIMESTAMP, ForeignKey, Index, CheckConstraint,
    PrimaryKeyConstraint,
)
from clipgraph.utils.clock import utc_now

from clipgraph.db.base import Base


class Video(Base):
    """视频表"""
    __tablename__ = "videos"

    # 主键
    id = Column(String(64), primary_key=True, comment="视频ID")

    # 外键
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="发布者")

    # 基本信息
    caption = Column(String(500), nullable=True, comment="视频文案")
    video_url = Column(String(1000), nullable=True, comment="播放地址")
    thumbnail_url = Column(String(1000), nullable=True, comment="封面地址")
    duration = Column(Integer, nullable=False, default=0, comment="时长（秒）")

    # 状态
    active = Column(Boolean, nullable=False, default=True, comment="是否有效（删除后为 false）")
    is_private = Column(Boolean, nullable=False, default=False, comment="是否私密")
    review_status = Column(String(20), nullable=False, default="APPROVED", comment="审核状态")

    # 统计（冗余计数）
    views_count = Column(Integer, nullable=False, default=0, comment="播放数")
    likes_count = Column(Integer, nullable=False, default=0, comment="点赞数")
    comments_count = Column(Integer, nullable=False, default=0, comment="评论数")
    shares_count = Column(Integer, nullable=False, default=0, comment="分享数")
    saves_count = Column(Integer, nullable=False, default=0, comment="收藏数")

    # 派生分数缓存（排序时总是重新计算，不作为数据源）
    engagement_score = Column(Float, nullable=False, default=0.0, comment="互动分")
    viral_score = Column(Float, nullable=False, default=0.0, comment="传播分")
    scores_updated_at = Column(TIMESTAMP, nullable=True, comment="分数缓存更新时间")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=utc_now, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=utc_now, onupdate=utc_now, comment="更新时间")

    # 约束和索引
    __table_args__ = (
        CheckConstraint('views_count >= 0', name='ck_videos_views_nonneg'),
        CheckConstraint('likes_count >= 0', name='ck_videos_likes_nonneg'),
        CheckConstraint('comments_count >= 0', name='ck_videos_comments_nonneg'),
        CheckConstraint('shares_count >= 0', name='ck_videos_shares_nonneg'),
        CheckConstraint('saves_count >= 0', name='ck_videos_saves_nonneg'),
        Index('idx_videos_user_created', 'user_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_videos_created_at', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_videos_visible', 'active', 'review_status', 'is_private'),
    )


class VideoHashtag(Base):
    """视频话题标签表（由文案解析，每次写文案时重建）"""
    __tablename__ = "video_hashtags"

    video_id = Column(String(64), ForeignKey("videos.id"), nullable=False, comment="视频ID")
    hashtag = Column(String(500), nullable=False, comment="标签（小写，不带 #，不超过文案长度）")

    __table_args__ = (
        PrimaryKeyConstraint('video_id', 'hashtag', name='pk_video_hashtags'),
        Index('idx_video_hashtags_tag', 'hashtag'),
    )
