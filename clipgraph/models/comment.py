"""
评论相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from .response import PageMeta


class CommentCreate(BaseModel):
    """发表评论请求"""
    content: str = Field(..., min_length=1, max_length=1000, description="评论内容")
    parent_id: Optional[str] = Field(None, description="父评论ID（回复时填写）")


class CommentModel(BaseModel):
    """评论节点"""
    id: str
    video_id: str
    user_id: str
    parent_id: Optional[str] = None
    content: str
    path: str = Field("", description="祖先路径")
    depth: int = Field(0, description="层级")
    is_deleted: bool = False
    likes_count: int = 0
    replies_count: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentThread(CommentModel):
    """顶级评论及其直接回复（回复按时间正序）"""
    replies: List[CommentModel] = Field(default_factory=list)


class CommentThreadPage(PageMeta):
    """评论分页"""
    content: List[CommentThread] = Field(default_factory=list)


class CommentDeleteResult(BaseModel):
    """删除评论结果"""
    comment_id: str
    deleted: bool = Field(..., description="本次是否实际删除")
    comments_count: int = Field(..., description="视频评论数")


class CommentPage(PageMeta):
    """评论平铺分页（用户发表的评论）"""
    content: List[CommentModel] = Field(default_factory=list)
