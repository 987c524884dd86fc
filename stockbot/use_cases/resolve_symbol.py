"""
代码解析用例 - 把自由文本映射为规范化的 Ticker

策略按成本从低到高排列，首个成功者胜出：
1. 6 位数字代码     -> 本土主板，无网络调用
2. 已带后缀的代码   -> 原样使用
3. 常用名称映射     -> 精确匹配
4. 新闻源代码提取   -> 扫描 (NNNNNN) 形式的代码
5. 代码搜索         -> 取第一个候选，可能落到其他市场，故放在最后
"""

import asyncio
import re
import unicodedata
from typing import Optional, Sequence

from stockbot.domain.models import DOMESTIC_CODE_PATTERN, Board, Ticker
from stockbot.domain.ticker_aliases import lookup_alias
from stockbot.infrastructure.errors import SymbolNotFoundError
from stockbot.infrastructure.logging import get_logger
from stockbot.ports.interfaces import NewsFeedPort, SymbolSearchPort
from stockbot.use_cases.base import FallbackChain, Strategy
from stockbot.use_cases.news_digest import extract_stock_code


logger = get_logger(__name__)

QUALIFIED_TICKER_PATTERN = re.compile(r"^[0-9A-Z.]+$")


class ExactCodeStrategy(Strategy[str, Ticker]):
    name = "exact_code"

    async def attempt(self, value: str) -> Optional[Ticker]:
        if DOMESTIC_CODE_PATTERN.match(value):
            return Ticker.domestic(value, Board.MAIN)
        return None


class QualifiedTickerStrategy(Strategy[str, Ticker]):
    name = "qualified_ticker"

    async def attempt(self, value: str) -> Optional[Ticker]:
        upper = value.upper()
        if "." in upper and QUALIFIED_TICKER_PATTERN.match(upper):
            return Ticker.parse(upper)
        return None


class AliasStrategy(Strategy[str, Ticker]):
    name = "alias"

    async def attempt(self, value: str) -> Optional[Ticker]:
        return lookup_alias(value)


class FeedCodeStrategy(Strategy[str, Ticker]):
    """从新闻源文本中提取 (NNNNNN) 形式的本土代码"""

    name = "feed_code"

    def __init__(self, news_port: NewsFeedPort, timeout: float = 3.0):
        self.news = news_port
        self.timeout = timeout

    async def attempt(self, value: str) -> Optional[Ticker]:
        try:
            feed_text = await asyncio.wait_for(
                asyncio.to_thread(self.news.fetch_feed, value, self.timeout),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"[TickerExtract] 新闻源超时 ({self.timeout}s): {value}")
            return None

        code = extract_stock_code(feed_text)
        if code is None:
            return None
        logger.info(f"[TickerExtract] 从新闻中找到 {value} 的代码 {code}")
        return Ticker.domestic(code, Board.MAIN)


class SymbolSearchStrategy(Strategy[str, Ticker]):
    name = "symbol_search"

    def __init__(self, search_port: SymbolSearchPort):
        self.search = search_port

    async def attempt(self, value: str) -> Optional[Ticker]:
        candidates = await asyncio.to_thread(self.search.search, value)
        if not candidates:
            return None
        symbol = candidates[0]["symbol"]
        logger.info(f"[TickerSearch] {value} -> {symbol}")
        return Ticker.parse(symbol)


class SymbolResolver:
    """
    代码解析器

    输入：用户输入的名称或代码
    输出：可直接交给 QuoteFetcher 的 Ticker
    """

    def __init__(
        self,
        news_port: NewsFeedPort,
        search_port: SymbolSearchPort,
        feed_timeout: float = 3.0,
        strategies: Optional[Sequence[Strategy[str, Ticker]]] = None,
    ):
        """
        初始化解析器

        Args:
            news_port: 新闻源端口（代码提取用）
            search_port: 代码搜索端口
            feed_timeout: 新闻源提取的超时（秒）
            strategies: 自定义策略序列（默认五级策略）
        """
        self.chain: FallbackChain[str, Ticker] = FallbackChain(
            "SymbolResolver",
            strategies or [
                ExactCodeStrategy(),
                QualifiedTickerStrategy(),
                AliasStrategy(),
                FeedCodeStrategy(news_port, timeout=feed_timeout),
                SymbolSearchStrategy(search_port),
            ],
        )

    async def resolve(self, text: str) -> Ticker:
        """
        解析股票代码

        Raises:
            SymbolNotFoundError: 所有策略都失败（终止，不应重试）
        """
        # 全角数字和字母（输入法常见）折叠为 ASCII
        subject = unicodedata.normalize("NFKC", text or "").strip()
        if not subject:
            raise SymbolNotFoundError(text or "")

        logger.info(f"[TickerCheck] 输入: \"{subject}\"")
        ticker = await self.chain.run(subject)
        if ticker is None:
            raise SymbolNotFoundError(subject)
        return ticker
