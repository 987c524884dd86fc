"""
缓存系统 - 进程内 TTL 缓存

提供：
- 内存缓存（LRU 容量上限 + 固定 TTL）
- 惰性过期：只在读取时淘汰，不做后台清理
- 可注入时钟，便于测试过期行为
- 缓存命中率统计

缓存只在事件循环线程中读写，不需要加锁。
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar


T = TypeVar('T')

Clock = Callable[[], float]


@dataclass
class CacheConfig:
    """缓存配置"""
    max_size: int = 500      # 最大缓存条目数
    ttl: float = 900         # TTL（秒）


@dataclass
class CacheEntry(Generic[T]):
    """缓存条目"""
    value: T
    created_at: float
    hits: int = 0

    def is_expired(self, now: float, ttl: float) -> bool:
        """检查是否过期"""
        return now - self.created_at >= ttl


@dataclass
class CacheStats:
    """缓存统计"""
    hits: int = 0
    misses: int = 0
    expirations: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "expirations": self.expirations,
            "evictions": self.evictions,
            "size": self.size,
            "hit_rate": round(self.hit_rate * 100, 2),
        }


class TTLCache(Generic[T]):
    """
    TTL 缓存

    同一键的并发写入以最后一次写入为准。
    """

    def __init__(self, config: Optional[CacheConfig] = None, clock: Optional[Clock] = None):
        """
        初始化缓存

        Args:
            config: 缓存配置
            clock: 时钟函数，返回秒级时间戳（默认 time.time）
        """
        self.config = config or CacheConfig()
        self.clock = clock or time.time
        self._cache: "OrderedDict[str, CacheEntry[T]]" = OrderedDict()
        self._stats = CacheStats()

    def get(self, key: str) -> Optional[T]:
        """获取未过期的缓存值，过期条目在此处淘汰"""
        entry = self.get_entry(key)
        return entry[0] if entry else None

    def get_entry(self, key: str) -> Optional[Tuple[T, float]]:
        """获取 (值, 写入时间)，未命中返回 None"""
        entry = self._cache.get(key)

        if entry is None:
            self._stats.misses += 1
            return None

        if entry.is_expired(self.clock(), self.config.ttl):
            del self._cache[key]
            self._stats.misses += 1
            self._stats.expirations += 1
            return None

        self._cache.move_to_end(key)
        entry.hits += 1
        self._stats.hits += 1
        return entry.value, entry.created_at

    def set(self, key: str, value: T) -> float:
        """
        写入缓存

        Returns:
            float: 写入时间
        """
        if key in self._cache:
            del self._cache[key]

        while len(self._cache) >= self.config.max_size:
            self._cache.popitem(last=False)
            self._stats.evictions += 1

        created_at = self.clock()
        self._cache[key] = CacheEntry(value=value, created_at=created_at)
        return created_at

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    @property
    def stats(self) -> CacheStats:
        self._stats.size = len(self._cache)
        return self._stats

    def get_stats_dict(self) -> Dict[str, Any]:
        return self.stats.to_dict()
