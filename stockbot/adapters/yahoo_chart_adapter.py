"""
Yahoo Chart HTTP 适配器 - 实现 ChartPort

客户端库被上游拦截时的兜底方案：
直接请求 v8 chart 接口，并带上浏览器 User-Agent。
"""

import requests

from stockbot.adapters.http import BROWSER_USER_AGENT, http_get
from stockbot.domain.models import RawQuote
from stockbot.ports.interfaces import (
    ChartPort,
    DataUnavailableError,
    SourceTimeoutError,
)


class YahooChartHTTPAdapter(ChartPort):
    """Yahoo Finance v8 chart 接口适配器"""

    API_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"

    def __init__(self, timeout: float = 5.0):
        """
        初始化适配器

        Args:
            timeout: 请求超时时间（秒）
        """
        self.timeout = timeout
        self.source = "Yahoo Finance (HTTP)"

    def chart(self, symbol: str) -> RawQuote:
        """获取图表元数据中的现价与昨收"""
        try:
            response = http_get(
                self.API_URL.format(symbol=symbol),
                params={"interval": "1m", "range": "1d"},
                headers={"User-Agent": BROWSER_USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            raise SourceTimeoutError(
                f"{symbol} chart 请求超时",
                source=self.source
            )
        except requests.exceptions.RequestException as e:
            raise DataUnavailableError(
                f"{symbol} chart 请求失败: {str(e)}",
                source=self.source
            )
        except ValueError as e:
            raise DataUnavailableError(
                f"{symbol} chart 响应解析失败: {str(e)}",
                source=self.source
            )

        results = (data.get("chart") or {}).get("result") or []
        meta = results[0].get("meta", {}) if results else {}
        price = meta.get("regularMarketPrice")
        if price is None:
            raise DataUnavailableError(
                f"{symbol} chart 响应缺少价格字段",
                source=self.source
            )

        return RawQuote(
            price=price,
            previous_close=meta.get("previousClose") or meta.get("chartPreviousClose"),
            currency=meta.get("currency"),
        )
