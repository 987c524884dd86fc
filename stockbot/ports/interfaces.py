"""
端口接口定义 - 依赖倒置的核心

所有外部服务交互都通过这些接口进行，
具体实现由适配器层提供。端口都是同步接口，
用例层通过 asyncio.to_thread 调用。

设计原则：
1. 接口隔离：每个接口只包含相关的方法
2. 依赖倒置：用例层依赖接口，不依赖具体实现
3. 异常抽象：接口定义标准异常类型
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from stockbot.domain.models import RawQuote


# ==================== 异常定义 ====================

class PortError(Exception):
    """端口层基础异常"""
    def __init__(self, message: str, source: str = "unknown"):
        self.message = message
        self.source = source
        super().__init__(f"[{source}] {message}")


class DataUnavailableError(PortError):
    """数据不可用异常"""
    pass


class RateLimitError(PortError):
    """频率限制异常"""
    pass


class QuotaExceededError(RateLimitError):
    """配额耗尽异常"""
    pass


class SourceTimeoutError(PortError):
    """超时异常"""
    pass


# ==================== 端口接口 ====================

class SymbolSearchPort(ABC):
    """代码搜索端口"""

    @abstractmethod
    def search(self, text: str) -> List[Dict[str, Optional[str]]]:
        """
        按名称搜索股票代码

        Args:
            text: 用户输入的名称

        Returns:
            List[Dict]: 候选列表，每项包含 symbol，可能包含 display_name
        """
        pass


class QuotePort(ABC):
    """结构化行情端口"""

    @abstractmethod
    def quote(self, symbol: str) -> RawQuote:
        """
        获取结构化行情

        Raises:
            DataUnavailableError: 数据不可用
        """
        pass


class ChartPort(ABC):
    """图表元数据端口（只有现价和昨收）"""

    @abstractmethod
    def chart(self, symbol: str) -> RawQuote:
        """
        获取图表元数据中的现价与昨收

        Raises:
            DataUnavailableError: 数据不可用
        """
        pass


class NewsFeedPort(ABC):
    """新闻源端口"""

    @abstractmethod
    def fetch_feed(self, query: str, timeout: Optional[float] = None) -> str:
        """
        获取新闻源原始文本

        Args:
            query: 查询词（股票名称）
            timeout: 请求超时（秒）

        Returns:
            str: 原始 RSS 文本（不做 XML 校验）
        """
        pass


class SummarizerPort(ABC):
    """生成式摘要端口"""

    @abstractmethod
    def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        根据提示词生成文本

        Raises:
            RateLimitError: 频率限制
            QuotaExceededError: 配额耗尽
            DataUnavailableError: 服务不可用
        """
        pass


class TimePort(ABC):
    """时间服务端口"""

    @abstractmethod
    def now(self) -> float:
        """当前时间戳（秒）"""
        pass
