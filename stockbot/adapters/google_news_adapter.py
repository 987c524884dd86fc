"""
Google News RSS 适配器 - 实现 NewsFeedPort

按股票名称查询韩文新闻 RSS，返回原始文本，由用例层解析。
"""

from typing import Optional

import requests

from stockbot.adapters.http import http_get
from stockbot.ports.interfaces import (
    NewsFeedPort,
    DataUnavailableError,
    SourceTimeoutError,
)


class GoogleNewsAdapter(NewsFeedPort):
    """Google News RSS 搜索适配器"""

    RSS_URL = "https://news.google.com/rss/search"

    def __init__(self, timeout: float = 3.0, query_suffix: str = "주식"):
        """
        初始化适配器

        Args:
            timeout: 默认请求超时时间（秒）
            query_suffix: 追加到查询词后的关键词
        """
        self.timeout = timeout
        self.query_suffix = query_suffix
        self.source = "Google News"

    def fetch_feed(self, query: str, timeout: Optional[float] = None) -> str:
        """获取新闻源原始文本"""
        params = {
            "q": f"{query} {self.query_suffix}".strip(),
            "hl": "ko",
            "gl": "KR",
            "ceid": "KR:ko",
        }
        try:
            response = http_get(
                self.RSS_URL,
                params=params,
                timeout=timeout or self.timeout,
            )
            response.raise_for_status()
            return response.text
        except requests.exceptions.Timeout:
            raise SourceTimeoutError(
                f"新闻源请求超时: {query}",
                source=self.source
            )
        except requests.exceptions.RequestException as e:
            raise DataUnavailableError(
                f"新闻源请求失败: {str(e)}",
                source=self.source
            )
