"""
代码解析用例单元测试
"""

import time

import pytest

from stockbot.domain.models import Board, Market
from stockbot.infrastructure.errors import SymbolNotFoundError
from stockbot.ports.interfaces import DataUnavailableError
from stockbot.use_cases.resolve_symbol import SymbolResolver


FEED_WITHOUT_CODE = "<item><title>관련 기사</title><link>https://news.example.com/x</link></item>"


class TestSymbolResolver:
    """SymbolResolver 测试类"""

    @pytest.fixture
    def resolver(self, mock_news_port, mock_search_port):
        return SymbolResolver(
            news_port=mock_news_port,
            search_port=mock_search_port,
            feed_timeout=0.5,
        )

    @pytest.mark.asyncio
    async def test_six_digit_code_is_domestic_main(self, resolver, mock_news_port, mock_search_port):
        ticker = await resolver.resolve("005930")

        assert ticker.market == Market.DOMESTIC
        assert ticker.board == Board.MAIN
        assert ticker.symbol == "005930.KS"
        mock_news_port.fetch_feed.assert_not_called()
        mock_search_port.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_six_digit_code_is_trimmed(self, resolver):
        ticker = await resolver.resolve("  000660 ")
        assert ticker.symbol == "000660.KS"

    @pytest.mark.asyncio
    async def test_full_width_code_is_folded_to_ascii(self, resolver, mock_news_port, mock_search_port):
        ticker = await resolver.resolve("００５９３０")

        assert ticker.code == "005930"
        assert ticker.symbol == "005930.KS"
        mock_news_port.fetch_feed.assert_not_called()
        mock_search_port.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_full_width_qualified_ticker(self, resolver):
        ticker = await resolver.resolve("０８６５２０．ＫＱ")
        assert ticker.symbol == "086520.KQ"

    @pytest.mark.asyncio
    async def test_non_ascii_digits_never_become_a_code(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = FEED_WITHOUT_CODE
        mock_search_port.search.return_value = []

        # 阿拉伯-印度数字在 NFKC 下不会折叠
        with pytest.raises(SymbolNotFoundError):
            await resolver.resolve("٠٠٥٩٣٠")

        mock_search_port.search.assert_called_once()

    @pytest.mark.asyncio
    async def test_qualified_ticker_passes_through(self, resolver, mock_news_port, mock_search_port):
        ticker = await resolver.resolve("086520.kq")

        assert ticker.symbol == "086520.KQ"
        assert ticker.board == Board.ALT
        mock_news_port.fetch_feed.assert_not_called()
        mock_search_port.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_qualified_foreign_ticker(self, resolver):
        ticker = await resolver.resolve("brk.b")
        assert ticker.market == Market.INTERNATIONAL
        assert ticker.symbol == "BRK.B"

    @pytest.mark.asyncio
    async def test_alias_bypasses_network(self, resolver, mock_news_port, mock_search_port):
        ticker = await resolver.resolve("삼성전자")

        assert ticker.symbol == "005930.KS"
        mock_news_port.fetch_feed.assert_not_called()
        mock_search_port.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_alias_variant(self, resolver):
        ticker = await resolver.resolve("하이닉스")
        assert ticker.symbol == "000660.KS"

    @pytest.mark.asyncio
    async def test_feed_code_extraction(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = (
            "<item><title>신규상장사(123456) 공모 흥행</title></item>"
        )

        ticker = await resolver.resolve("신규상장사")

        assert ticker.symbol == "123456.KS"
        mock_news_port.fetch_feed.assert_called_once_with("신규상장사", 0.5)
        mock_search_port.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_used_when_feed_has_no_code(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = FEED_WITHOUT_CODE

        ticker = await resolver.resolve("애쁠")

        assert ticker.symbol == "AAPL"
        assert ticker.market == Market.INTERNATIONAL
        mock_search_port.search.assert_called_once_with("애쁠")

    @pytest.mark.asyncio
    async def test_search_result_is_parsed(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = FEED_WITHOUT_CODE
        mock_search_port.search.return_value = [{"symbol": "035720.KS", "display_name": "Kakao"}]

        ticker = await resolver.resolve("kakao corp")

        assert ticker.market == Market.DOMESTIC
        assert ticker.board == Board.MAIN

    @pytest.mark.asyncio
    async def test_feed_error_falls_through(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.side_effect = DataUnavailableError("down", source="Google News")

        ticker = await resolver.resolve("애쁠")

        assert ticker.symbol == "AAPL"

    @pytest.mark.asyncio
    async def test_feed_timeout_falls_through(self, mock_news_port, mock_search_port):
        def slow_feed(query, timeout=None):
            time.sleep(0.3)
            return "<item><title>늦은 기사(999999)</title></item>"

        mock_news_port.fetch_feed.side_effect = slow_feed
        resolver = SymbolResolver(mock_news_port, mock_search_port, feed_timeout=0.05)

        ticker = await resolver.resolve("애쁠")

        assert ticker.symbol == "AAPL"

    @pytest.mark.asyncio
    async def test_not_found_when_all_fail(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = FEED_WITHOUT_CODE
        mock_search_port.search.return_value = []

        with pytest.raises(SymbolNotFoundError) as exc_info:
            await resolver.resolve("없는회사명")

        assert exc_info.value.subject == "없는회사명"

    @pytest.mark.asyncio
    async def test_search_error_is_not_found(self, resolver, mock_news_port, mock_search_port):
        mock_news_port.fetch_feed.return_value = FEED_WITHOUT_CODE
        mock_search_port.search.side_effect = DataUnavailableError("blocked", source="Yahoo Finance")

        with pytest.raises(SymbolNotFoundError):
            await resolver.resolve("없는회사명")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_empty_input(self, resolver, mock_news_port, mock_search_port, text):
        with pytest.raises(SymbolNotFoundError):
            await resolver.resolve(text)

        mock_news_port.fetch_feed.assert_not_called()
        mock_search_port.search.assert_not_called()

    def test_default_strategy_order(self, resolver):
        assert resolver.chain.strategy_names == [
            "exact_code",
            "qualified_ticker",
            "alias",
            "feed_code",
            "symbol_search",
        ]
