"""
互动操作结果模型

每个互动操作返回操作后的状态和计数，调用方可直接组装响应
"""

from pydantic import BaseModel, Field


class LikeState(BaseModel):
    """视频点赞状态"""
    video_id: str
    liked: bool = Field(..., description="当前用户是否已点赞")
    likes_count: int = Field(..., description="点赞数")


class CommentLikeState(BaseModel):
    """评论点赞状态"""
    comment_id: str
    liked: bool
    likes_count: int


class FollowState(BaseModel):
    """关注状态"""
    user_id: str = Field(..., description="被关注者ID")
    following: bool = Field(..., description="是否已关注")
    followers_count: int = Field(..., description="被关注者粉丝数")
    following_count: int = Field(..., description="关注者关注数")


class ViewState(BaseModel):
    """播放计数"""
    video_id: str
    views_count: int


class ShareState(BaseModel):
    """分享计数"""
    video_id: str
    shares_count: int


class SaveState(BaseModel):
    """收藏计数"""
    video_id: str
    saves_count: int
