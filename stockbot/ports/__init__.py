"""
端口层 - 定义与外部世界交互的接口

遵循依赖倒置原则，用例层只依赖这些抽象接口，
具体实现由适配器层提供。

包含：
- SymbolSearchPort: 代码搜索接口
- QuotePort: 结构化行情接口
- ChartPort: 图表元数据接口
- NewsFeedPort: 新闻源接口
- SummarizerPort: 生成式摘要接口
- TimePort: 时间服务接口
"""

from stockbot.ports.interfaces import (
    SymbolSearchPort,
    QuotePort,
    ChartPort,
    NewsFeedPort,
    SummarizerPort,
    TimePort,
    PortError,
    DataUnavailableError,
    RateLimitError,
    QuotaExceededError,
    SourceTimeoutError,
)

__all__ = [
    "SymbolSearchPort",
    "QuotePort",
    "ChartPort",
    "NewsFeedPort",
    "SummarizerPort",
    "TimePort",
    "PortError",
    "DataUnavailableError",
    "RateLimitError",
    "QuotaExceededError",
    "SourceTimeoutError",
]
