"""
用例层 - 业务逻辑的核心实现

每个用例只依赖 ports 接口，不依赖具体实现。

包含：
- SymbolResolver: 自由文本 -> Ticker（五级降级）
- QuoteFetcher: Ticker -> 价格快照（三级降级 + 一次跨板块重试）
- AnalysisOrchestrator: 名称 -> 新闻摘要（缓存 + 时间预算）
"""

from stockbot.use_cases.base import FallbackChain, Strategy
from stockbot.use_cases.resolve_symbol import SymbolResolver
from stockbot.use_cases.fetch_quote import QuoteFetcher, build_snapshot, compute_change
from stockbot.use_cases.analyze_news import AnalysisOrchestrator
from stockbot.use_cases.news_digest import extract_headlines, extract_stock_code

__all__ = [
    "FallbackChain",
    "Strategy",
    "SymbolResolver",
    "QuoteFetcher",
    "build_snapshot",
    "compute_change",
    "AnalysisOrchestrator",
    "extract_headlines",
    "extract_stock_code",
]
