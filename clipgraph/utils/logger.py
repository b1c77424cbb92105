"""
日志配置

stderr + 按大小轮转的文件日志
"""

import os
import sys
from loguru import logger

from clipgraph.config.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"

_configured = False


def setup_logging(level: str = None, log_dir: str = None):
    """
    安装 loguru 日志输出

    重复调用只生效一次
    """
    global _configured
    if _configured:
        return

    level = level or settings.LOG_LEVEL
    log_dir = log_dir or settings.LOG_DIR

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    os.makedirs(log_dir, exist_ok=True)
    logger.add(
        os.path.join(log_dir, "clipgraph.log"),
        rotation="10 MB",
        retention="7 days",
        compression="zip",
        format=LOG_FORMAT,
        level=level,
    )

    _configured = True
