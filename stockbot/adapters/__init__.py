"""
适配器层 - 端口接口的具体实现

将外部服务（yfinance, Yahoo chart 接口, Google News, LiteLLM 等）
适配为标准的端口接口。

包含：
- YFinanceAdapter: 代码搜索 / 结构化行情 / 图表元数据
- YahooChartHTTPAdapter: 直接 HTTP 请求的图表元数据
- GoogleNewsAdapter: Google News RSS 新闻源
- LiteLLMAdapter: 生成式摘要
- SystemTimeAdapter: 系统时间
"""

from stockbot.adapters.yfinance_adapter import YFinanceAdapter
from stockbot.adapters.yahoo_chart_adapter import YahooChartHTTPAdapter
from stockbot.adapters.google_news_adapter import GoogleNewsAdapter
from stockbot.adapters.llm_adapter import LiteLLMAdapter
from stockbot.adapters.system_time_adapter import SystemTimeAdapter

__all__ = [
    "YFinanceAdapter",
    "YahooChartHTTPAdapter",
    "GoogleNewsAdapter",
    "LiteLLMAdapter",
    "SystemTimeAdapter",
]
