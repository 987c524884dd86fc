"""
基础设施层 - 横切关注点

包含：
- logging: 结构化日志系统
- errors: 应用层异常
- cache: 可注入时钟的 TTL 缓存
- tasks: 竞速与进行中任务去重
"""

from stockbot.infrastructure.logging import (
    setup_logging,
    get_logger,
    LogContext,
    StructuredFormatter,
    SimpleFormatter,
)
from stockbot.infrastructure.errors import (
    StockBotError,
    SymbolNotFoundError,
    QuoteUnavailableError,
    EnrichmentDegradedError,
)
from stockbot.infrastructure.cache import (
    TTLCache,
    CacheConfig,
    CacheStats,
)
from stockbot.infrastructure.tasks import (
    race_with_background,
    InFlightRegistry,
)

__all__ = [
    # 日志
    "setup_logging",
    "get_logger",
    "LogContext",
    "StructuredFormatter",
    "SimpleFormatter",
    # 错误
    "StockBotError",
    "SymbolNotFoundError",
    "QuoteUnavailableError",
    "EnrichmentDegradedError",
    # 缓存
    "TTLCache",
    "CacheConfig",
    "CacheStats",
    # 任务
    "race_with_background",
    "InFlightRegistry",
]
