"""
话题标签解析
"""

import re
from typing import List, Optional

HASHTAG_PATTERN = re.compile(r"#(\w+)")


def extract_hashtags(caption: Optional[str]) -> List[str]:
    """
    从视频文案中提取话题标签

    小写化并去重，保留首次出现的顺序

    Args:
        caption: 视频文案

    Returns:
        标签列表（不带 #）
    """
    if not caption:
        return []

    tags = []
    for match in HASHTAG_PATTERN.finditer(caption):
        tag = match.group(1).lower()
        if tag not in tags:
            tags.append(tag)
    return tags


def normalize_hashtag(tag: str) -> str:
    """规范化查询用的标签：去掉前导 # 并小写"""
    return tag.strip().lstrip("#").lower()
