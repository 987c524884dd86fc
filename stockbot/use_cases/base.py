"""
用例基类 - 有序降级策略链

代码解析和行情获取都是“按顺序尝试，首个成功者胜出”的结构，
共用同一个 FallbackChain 执行器。
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, TypeVar

from stockbot.infrastructure.logging import get_logger


I = TypeVar('I')
T = TypeVar('T')

logger = get_logger(__name__)


class Strategy(ABC, Generic[I, T]):
    """
    策略基类

    attempt 返回 None 表示“本策略不适用或未找到”，
    抛出异常表示失败；两者都会让执行器继续尝试下一个策略。
    """

    name: str = "strategy"

    @abstractmethod
    async def attempt(self, value: I) -> Optional[T]:
        pass


class FallbackChain(Generic[I, T]):
    """按顺序执行策略，返回首个非 None 的结果"""

    def __init__(self, name: str, strategies: Sequence[Strategy[I, T]]):
        self.name = name
        self.strategies: List[Strategy[I, T]] = list(strategies)

    async def run(self, value: I) -> Optional[T]:
        for strategy in self.strategies:
            try:
                result = await strategy.attempt(value)
            except Exception as e:
                logger.warning(f"[{self.name}] {strategy.name} 失败 ({value}): {e}")
                continue
            if result is not None:
                logger.info(f"[{self.name}] {strategy.name} 成功: {value}")
                return result
            logger.debug(f"[{self.name}] {strategy.name} 无结果: {value}")
        return None

    @property
    def strategy_names(self) -> List[str]:
        return [s.name for s in self.strategies]
