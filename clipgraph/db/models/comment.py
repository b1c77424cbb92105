"""
评论表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, TIMESTAMP, ForeignKey, Index, CheckConstraint
from clipgraph.utils.clock import utc_now

from clipgraph.db.base import Base


class Comment(Base):
    """
    评论表

    路径枚举：path 为所有祖先 ID 依次以 "." 结尾拼接（顶级评论为 ""），
    depth 为祖先数量，二者在插入时确定，之后不再修改
    """
    __tablename__ = "comments"

    # 主键
    id = Column(String(64), primary_key=True, comment="评论ID")

    # 外键
    video_id = Column(String(64), ForeignKey("videos.id"), nullable=False, comment="视频ID")
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, comment="评论用户")
    parent_id = Column(String(64), ForeignKey("comments.id"), nullable=True, comment="父评论ID")

    # 评论内容
    content = Column(Text, nullable=False, comment="评论内容")

    # 树结构
    path = Column(Text, nullable=False, default="", comment="祖先路径（层级不限）")
    depth = Column(Integer, nullable=False, default=0, comment="层级")

    # 状态
    is_deleted = Column(Boolean, nullable=False, default=False, comment="是否已删除")

    # 统计
    likes_count = Column(Integer, nullable=False, default=0, comment="点赞数")
    replies_count = Column(Integer, nullable=False, default=0, comment="回复数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=utc_now, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=utc_now, onupdate=utc_now, comment="更新时间")

    # 约束和索引
    __table_args__ = (
        CheckConstraint('likes_count >= 0', name='ck_comments_likes_nonneg'),
        CheckConstraint('replies_count >= 0', name='ck_comments_replies_nonneg'),
        Index('idx_comments_video', 'video_id', 'parent_id', 'created_at'),
        Index('idx_comments_parent', 'parent_id', 'created_at'),
        Index('idx_comments_user', 'user_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )

    def child_path(self) -> str:
        """子评论的路径：本评论路径 + 本评论ID + "." """
        return f"{self.path}{self.id}."

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None
