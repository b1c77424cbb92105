"""
clipgraph - 短视频社交平台互动图谱与 Feed 排序核心
"""

__version__ = "1.0.0"
