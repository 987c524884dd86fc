"""
领域模型层 - 核心业务实体和值对象

包含：
- Ticker: 规范化股票代码（本土主板/KOSDAQ 或其他市场）
- QuoteSnapshot: 价格快照
- NewsItem: 新闻条目
- AnalysisResult: 新闻分析结果
- ReplyEnvelope: 对外回复
"""

from stockbot.domain.models import (
    Market,
    Board,
    AnalysisStatus,
    ErrorCode,
    Ticker,
    RawQuote,
    QuoteSnapshot,
    NewsItem,
    NewsDigest,
    AnalysisResult,
    ReplyEnvelope,
)
from stockbot.domain.ticker_aliases import COMMON_STOCKS, lookup_alias

__all__ = [
    "Market",
    "Board",
    "AnalysisStatus",
    "ErrorCode",
    "Ticker",
    "RawQuote",
    "QuoteSnapshot",
    "NewsItem",
    "NewsDigest",
    "AnalysisResult",
    "ReplyEnvelope",
    "COMMON_STOCKS",
    "lookup_alias",
]
