from catalog.configs.logger import file_logger
from catalog.configs.settings import (
    API_PREFIX,
    CONFIG_MAP,
    DEFAULT_PAGE_SIZE,
    MAX_CATEGORY_NAME_LENGTH,
    MAX_PAGE_SIZE,
    MAX_TITLE_LENGTH,
    SEED_CATEGORIES,
    CacheConfig,
    LimiterConfig,
    RedisCacheConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "API_PREFIX",
    "CONFIG_MAP",
    "DEFAULT_PAGE_SIZE",
    "MAX_CATEGORY_NAME_LENGTH",
    "MAX_PAGE_SIZE",
    "MAX_TITLE_LENGTH",
    "SEED_CATEGORIES",
    "CacheConfig",
    "LimiterConfig",
    "RedisCacheConfig",
    "file_logger",
    "pool_kwargs",
    "settings",
]
