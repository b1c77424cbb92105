"""
统一响应模型
"""

from typing import Generic, TypeVar, Optional
from pydantic import BaseModel, ConfigDict, Field


T = TypeVar('T')


class PageMeta(BaseModel):
    """分页元数据（page 从 0 开始）"""
    page: int = Field(..., description="当前页码")
    size: int = Field(..., description="每页数量")
    total_elements: int = Field(..., description="总数")
    total_pages: int = Field(..., description="总页数")
    first: bool = Field(..., description="是否第一页")
    last: bool = Field(..., description="是否最后一页")


class ApiResponse(BaseModel, Generic[T]):
    """统一API响应格式"""
    success: bool = Field(True, description="请求是否成功")
    data: Optional[T] = Field(None, description="响应数据")
    message: Optional[str] = Field(None, description="响应消息")
    code: Optional[int] = Field(None, description="业务错误码")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": {"key": "value"},
                "message": "操作成功"
            }
        }
    )


class ErrorResponse(BaseModel):
    """错误响应"""
    success: bool = Field(False, description="请求失败")
    code: int = Field(..., description="错误码")
    message: str = Field(..., description="错误信息")
    error: Optional[dict] = Field(None, description="错误详情")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "code": 400,
                "message": "Cannot follow yourself",
                "error": {
                    "code": "SELF_FOLLOW",
                    "message": "Cannot follow yourself"
                }
            }
        }
    )
