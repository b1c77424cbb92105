"""
用户表 ORM 模型
"""

from sqlalchemy import Column, String, Integer, Boolean, TIMESTAMP, Index, CheckConstraint
from clipgraph.utils.clock import utc_now

from clipgraph.db.base import Base


class User(Base):
    """用户表"""
    __tablename__ = "users"

    # 主键
    id = Column(String(64), primary_key=True, comment="用户ID")

    # 基本信息
    username = Column(String(64), unique=True, nullable=False, comment="用户名（唯一）")
    display_name = Column(String(100), nullable=True, comment="昵称")

    # 状态
    is_private = Column(Boolean, nullable=False, default=False, comment="是否私密账号")
    active = Column(Boolean, nullable=False, default=True, comment="是否有效（注销后为 false）")

    # 统计字段（冗余计数，由互动操作原子维护）
    followers_count = Column(Integer, nullable=False, default=0, comment="粉丝数")
    following_count = Column(Integer, nullable=False, default=0, comment="关注数")
    videos_count = Column(Integer, nullable=False, default=0, comment="视频数")
    total_likes_received = Column(Integer, nullable=False, default=0, comment="获赞总数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=utc_now, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=utc_now, onupdate=utc_now, comment="更新时间")
    deleted_at = Column(TIMESTAMP, nullable=True, comment="注销时间")

    # 约束和索引
    __table_args__ = (
        CheckConstraint('followers_count >= 0', name='ck_users_followers_nonneg'),
        CheckConstraint('following_count >= 0', name='ck_users_following_nonneg'),
        CheckConstraint('videos_count >= 0', name='ck_users_videos_nonneg'),
        CheckConstraint('total_likes_received >= 0', name='ck_users_likes_nonneg'),
        Index('idx_users_active', 'active'),
        Index('idx_users_followers', 'followers_count'),
    )
