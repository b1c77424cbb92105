"""
分页工具

page 从 0 开始，size 截断到 [1, MAX_PAGE_SIZE]
"""

import math
from typing import Optional, Tuple

from clipgraph.config.settings import settings
from clipgraph.exceptions import InvalidOperationError


def normalize_page(page: Optional[int], size: Optional[int]) -> Tuple[int, int]:
    """
    校验并规范化分页参数

    Args:
        page: 页码（从 0 开始）
        size: 每页数量

    Returns:
        (page, size)

    Raises:
        InvalidOperationError: 页码为负数
    """
    if page is None:
        page = 0
    if page < 0:
        raise InvalidOperationError("INVALID_PAGE", "Page cannot be negative")

    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    size = max(1, min(size, settings.MAX_PAGE_SIZE))

    return page, size


def page_meta(page: int, size: int, total: int) -> dict:
    """根据总数计算分页元数据"""
    total_pages = math.ceil(total / size) if total > 0 else 0
    return {
        "page": page,
        "size": size,
        "total_elements": total,
        "total_pages": total_pages,
        "first": page == 0,
        "last": page + 1 >= total_pages,
    }
