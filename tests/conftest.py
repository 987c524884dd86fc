"""
测试配置 - pytest 配置和公共 fixtures
"""

import pytest
from unittest.mock import Mock

from stockbot.domain.models import RawQuote
from stockbot.infrastructure.cache import CacheConfig, TTLCache


SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<title>"삼성전자 주식" - Google 뉴스</title>
<link>https://news.google.com/search?q=삼성전자</link>
<description>Google 뉴스</description>
<item>
<title>삼성전자(005930), 반도체 업황 회복 기대 - 한국경제</title>
<link>https://news.example.com/a1</link>
</item>
<item>
<title><![CDATA[[속보] 삼성전자 HBM 공급 확대]]></title>
<link>https://news.example.com/a2</link>
</item>
<item>
<title>외국인 순매도 지속 &amp; 주가 약세</title>
<link>https://news.example.com/a3</link>
</item>
<item>
<title>증권가 목표주가 상향</title>
<link>https://news.example.com/a4</link>
</item>
<item>
<title>다섯 번째 기사</title>
<link>https://news.example.com/a5</link>
</item>
</channel></rss>"""

EMPTY_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<title>"없는회사 주식" - Google 뉴스</title>
<link>https://news.google.com/search?q=없는회사</link>
</channel></rss>"""

SUMMARY_TEXT = (
    "📢 긍정: 반도체 업황 회복 기대\n"
    "⚠️ 부정: 외국인 순매도 지속\n"
    "📊 투자 의견: 매수 60%, 매도 10%, 보류 30%"
)


class FakeClock:
    """可手动推进的时钟"""

    def __init__(self, start: float = 1_000_000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


# ==================== Fixtures ====================

@pytest.fixture
def sample_feed():
    return SAMPLE_FEED


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def analysis_cache(fake_clock):
    """使用假时钟的分析缓存"""
    return TTLCache(CacheConfig(max_size=500, ttl=900), clock=fake_clock)


@pytest.fixture
def mock_news_port(sample_feed):
    """模拟新闻源端口"""
    port = Mock()
    port.fetch_feed.return_value = sample_feed
    return port


@pytest.fixture
def mock_search_port():
    """模拟代码搜索端口"""
    port = Mock()
    port.search.return_value = [
        {"symbol": "AAPL", "display_name": "Apple Inc."},
    ]
    return port


@pytest.fixture
def mock_quote_port():
    """模拟结构化行情端口"""
    port = Mock()
    port.quote.return_value = RawQuote(
        price=71500.0,
        previous_close=70300.0,
        change=1200.0,
        change_percent=1.7069701,
        currency="KRW",
        name="Samsung Electronics",
    )
    return port


@pytest.fixture
def mock_chart_port():
    """模拟图表元数据端口"""
    port = Mock()
    port.chart.return_value = RawQuote(price=71500.0, previous_close=70000.0, currency="KRW")
    return port


@pytest.fixture
def mock_http_chart_port():
    """模拟直接 HTTP 图表端口"""
    port = Mock()
    port.chart.return_value = RawQuote(price=71500.0, previous_close=70000.0, currency="KRW")
    return port


@pytest.fixture
def mock_summarizer_port():
    """模拟生成式摘要端口"""
    port = Mock()
    port.complete.return_value = SUMMARY_TEXT
    return port


@pytest.fixture
def empty_feed():
    return EMPTY_FEED
