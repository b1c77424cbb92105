"""
应用全局配置

从 config.yaml 加载配置，支持环境变量覆盖
"""

import yaml
from pathlib import Path
from typing import Optional, List
import os


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"


class Settings:
    """应用全局配置（从 config.yaml 加载）"""

    def __init__(self, config_path: Optional[str] = None):
        # 加载 config.yaml（CLIPGRAPH_CONFIG 可指定其他路径）
        path = Path(config_path or os.getenv("CLIPGRAPH_CONFIG", DEFAULT_CONFIG_PATH))
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        else:
            self._config = {}

    def _get(self, section: str, key: str, default=None):
        return self._config.get(section, {}).get(key, default)

    # ==================== 应用基础配置 ====================
    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", self._get("app", "name", "ClipGraph API"))

    @property
    def APP_VERSION(self) -> str:
        return os.getenv("APP_VERSION", self._get("app", "version", "1.0.0"))

    @property
    def API_V1_PREFIX(self) -> str:
        return os.getenv("API_V1_PREFIX", self._get("app", "api_prefix", "/api/v1"))

    @property
    def DEBUG(self) -> bool:
        debug_str = os.getenv("DEBUG", str(self._get("app", "debug", False)))
        return debug_str.lower() in ("true", "1", "yes")

    # ==================== 数据库配置 ====================
    @property
    def DATABASE_ENABLED(self) -> bool:
        enabled_str = os.getenv("DATABASE_ENABLED", str(self._get("database", "enabled", False)))
        return enabled_str.lower() in ("true", "1", "yes")

    @property
    def DATABASE_URL(self) -> Optional[str]:
        if not self.DATABASE_ENABLED:
            return None
        return os.getenv("DATABASE_URL", self._get("database", "url"))

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(os.getenv("DATABASE_POOL_SIZE", self._get("database", "pool_size", 10)))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(os.getenv("DATABASE_MAX_OVERFLOW", self._get("database", "max_overflow", 20)))

    # ==================== JWT 认证配置 ====================
    @property
    def JWT_SECRET_KEY(self) -> str:
        return os.getenv("JWT_SECRET_KEY", self._get("jwt", "secret_key", "change-me"))

    @property
    def JWT_ALGORITHM(self) -> str:
        return os.getenv("JWT_ALGORITHM", self._get("jwt", "algorithm", "HS256"))

    # ==================== CORS 配置 ====================
    @property
    def CORS_ORIGINS(self) -> List[str]:
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [origin.strip() for origin in env_origins.split(",")]
        return self._get("cors", "origins", [])

    # ==================== Feed 配置 ====================
    @property
    def DEFAULT_PAGE_SIZE(self) -> int:
        return int(os.getenv("DEFAULT_PAGE_SIZE", self._get("feed", "default_page_size", 10)))

    @property
    def MAX_PAGE_SIZE(self) -> int:
        return int(os.getenv("MAX_PAGE_SIZE", self._get("feed", "max_page_size", 50)))

    @property
    def FEED_CANDIDATE_LIMIT(self) -> int:
        return int(os.getenv("FEED_CANDIDATE_LIMIT", self._get("feed", "candidate_limit", 1000)))

    @property
    def TRENDING_WINDOW_HOURS(self) -> int:
        return int(os.getenv("TRENDING_WINDOW_HOURS", self._get("feed", "trending_window_hours", 48)))

    # ==================== 评论配置 ====================
    @property
    def COMMENT_MAX_LENGTH(self) -> int:
        return int(os.getenv("COMMENT_MAX_LENGTH", self._get("comment", "max_length", 1000)))

    @property
    def COMMENT_REPLY_PREVIEW(self) -> int:
        return int(os.getenv("COMMENT_REPLY_PREVIEW", self._get("comment", "reply_preview", 3)))

    # ==================== 日志配置 ====================
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", self._get("logging", "level", "INFO"))

    @property
    def LOG_DIR(self) -> str:
        return os.getenv("LOG_DIR", self._get("logging", "dir", "logs"))


# 全局配置实例
settings = Settings()
