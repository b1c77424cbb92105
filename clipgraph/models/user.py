"""
用户相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from .response import PageMeta


class UserCreate(BaseModel):
    """创建用户"""
    username: str = Field(..., min_length=3, max_length=30, description="用户名")
    display_name: Optional[str] = Field(None, max_length=100, description="昵称")
    is_private: bool = Field(False, description="是否私密账号")


class UserSummary(BaseModel):
    """用户摘要"""
    id: str
    username: str
    display_name: Optional[str] = None
    is_private: bool = False
    followers_count: int = 0
    following_count: int = 0
    videos_count: int = 0
    total_likes_received: int = 0

    model_config = ConfigDict(from_attributes=True)


class UserPage(PageMeta):
    """用户分页"""
    content: List[UserSummary] = Field(default_factory=list)
