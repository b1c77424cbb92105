"""
视频相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum


class ReviewStatus(str, Enum):
    """审核状态"""
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class VideoCreate(BaseModel):
    """发布视频（媒体文件已由存储服务处理）"""
    caption: Optional[str] = Field(None, max_length=500, description="文案")
    video_url: Optional[str] = Field(None, max_length=1000, description="播放地址")
    thumbnail_url: Optional[str] = Field(None, max_length=1000, description="封面地址")
    duration: int = Field(0, ge=0, description="时长（秒）")
    is_private: bool = Field(False, description="是否私密")


class CaptionUpdate(BaseModel):
    """修改文案"""
    caption: Optional[str] = Field(None, max_length=500)


class VideoModel(BaseModel):
    """视频详情"""
    id: str
    user_id: str
    caption: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: int = 0
    active: bool = True
    is_private: bool = False
    review_status: ReviewStatus = ReviewStatus.APPROVED
    views_count: int = 0
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    saves_count: int = 0
    hashtags: List[str] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
