"""
YFinance 适配器 - 实现 SymbolSearchPort、QuotePort 和 ChartPort

通过 yfinance 客户端库访问 Yahoo Finance：
- search: 代码模糊搜索
- quote: 结构化行情（Ticker.info）
- chart: 图表元数据（history metadata）
"""

from typing import Dict, List, Optional

import yfinance as yf

from stockbot.domain.models import RawQuote
from stockbot.ports.interfaces import (
    SymbolSearchPort,
    QuotePort,
    ChartPort,
    DataUnavailableError,
)


class YFinanceAdapter(SymbolSearchPort, QuotePort, ChartPort):
    """
    Yahoo Finance 数据适配器

    将 yfinance 的数据转换为领域模型，
    所有失败统一转换为 DataUnavailableError。
    """

    def __init__(self, search_limit: int = 5):
        """
        初始化适配器

        Args:
            search_limit: 搜索返回的最大候选数
        """
        self.search_limit = search_limit
        self.source = "Yahoo Finance"

    def _get_ticker(self, symbol: str) -> yf.Ticker:
        """获取 yfinance Ticker 对象"""
        return yf.Ticker(symbol)

    def search(self, text: str) -> List[Dict[str, Optional[str]]]:
        """按名称搜索股票代码"""
        try:
            result = yf.Search(text, max_results=self.search_limit, news_count=0)
            quotes = result.quotes or []
        except Exception as e:
            raise DataUnavailableError(
                f"搜索 {text} 失败: {str(e)}",
                source=self.source
            )

        return [
            {
                "symbol": item["symbol"],
                "display_name": item.get("shortname") or item.get("longname"),
            }
            for item in quotes
            if item.get("symbol")
        ]

    def quote(self, symbol: str) -> RawQuote:
        """获取结构化行情"""
        try:
            info = self._get_ticker(symbol).info or {}
        except Exception as e:
            raise DataUnavailableError(
                f"获取 {symbol} 行情失败: {str(e)}",
                source=self.source
            )

        price = info.get('regularMarketPrice')
        if price is None:
            raise DataUnavailableError(
                f"{symbol} 行情缺少价格字段",
                source=self.source
            )

        return RawQuote(
            price=price,
            previous_close=info.get('regularMarketPreviousClose') or info.get('previousClose'),
            change=info.get('regularMarketChange'),
            change_percent=info.get('regularMarketChangePercent'),
            currency=info.get('currency'),
            name=info.get('shortName') or info.get('longName'),
        )

    def chart(self, symbol: str) -> RawQuote:
        """获取图表元数据中的现价与昨收"""
        try:
            stock = self._get_ticker(symbol)
            stock.history(period="1d")
            meta = stock.get_history_metadata() or {}
        except Exception as e:
            raise DataUnavailableError(
                f"获取 {symbol} 图表数据失败: {str(e)}",
                source=self.source
            )

        price = meta.get('regularMarketPrice')
        if price is None:
            raise DataUnavailableError(
                f"{symbol} 图表数据缺少价格字段",
                source=self.source
            )

        return RawQuote(
            price=price,
            previous_close=meta.get('previousClose') or meta.get('chartPreviousClose'),
            currency=meta.get('currency'),
        )
