"""
点赞关系表 ORM 模型
"""

from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, Index, UniqueConstraint
from clipgraph.utils.clock import utc_now

from clipgraph.db.base import Base


class VideoLike(Base):
    """视频点赞表（每个用户对每个视频至多一条）"""
    __tablename__ = "video_likes"

    # 主键
    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")

    # 外键
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="点赞用户")
    video_id = Column(String(64), ForeignKey("videos.id"), nullable=False, comment="视频ID")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=utc_now, comment="点赞时间")

    # 约束和索引
    __table_args__ = (
        UniqueConstraint('user_id', 'video_id', name='uk_like_user_video'),
        Index('idx_likes_video', 'video_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )


class CommentLike(Base):
    """评论点赞表（每个用户对每条评论至多一条）"""
    __tablename__ = "comment_likes"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="点赞用户")
    comment_id = Column(String(64), ForeignKey("comments.id"), nullable=False, comment="评论ID")

    created_at = Column(TIMESTAMP, nullable=False, default=utc_now, comment="点赞时间")

    __table_args__ = (
        UniqueConstraint('user_id', 'comment_id', name='uk_comment_like_user_comment'),
    )
