"""
领域模型单元测试
"""

import pytest
from decimal import Decimal

from stockbot.domain.models import (
    AnalysisResult,
    AnalysisStatus,
    Board,
    ErrorCode,
    Market,
    QuoteSnapshot,
    ReplyEnvelope,
    Ticker,
)
from stockbot.domain.ticker_aliases import lookup_alias


class TestTicker:
    """Ticker 测试类"""

    def test_domestic_main_symbol(self):
        ticker = Ticker.domestic("005930")
        assert ticker.market == Market.DOMESTIC
        assert ticker.board == Board.MAIN
        assert ticker.symbol == "005930.KS"
        assert ticker.is_domestic_main

    def test_domestic_alt_symbol(self):
        ticker = Ticker.domestic("086520", Board.ALT)
        assert ticker.symbol == "086520.KQ"
        assert not ticker.is_domestic_main

    def test_international_symbol(self):
        ticker = Ticker.international("AAPL")
        assert ticker.symbol == "AAPL"
        assert ticker.board is None
        assert not ticker.is_domestic_main

    @pytest.mark.parametrize("symbol,market,board", [
        ("005930.KS", Market.DOMESTIC, Board.MAIN),
        ("086520.KQ", Market.DOMESTIC, Board.ALT),
        ("AAPL", Market.INTERNATIONAL, None),
        ("BRK.B", Market.INTERNATIONAL, None),
        ("7203.T", Market.INTERNATIONAL, None),
        ("００５９３０.KS", Market.INTERNATIONAL, None),
    ])
    def test_parse(self, symbol, market, board):
        ticker = Ticker.parse(symbol)
        assert ticker.market == market
        assert ticker.board == board
        assert ticker.symbol == symbol

    def test_with_board_keeps_code(self):
        alt = Ticker.domestic("005930").with_board(Board.ALT)
        assert alt.code == "005930"
        assert alt.symbol == "005930.KQ"

    def test_ticker_is_immutable(self):
        ticker = Ticker.domestic("005930")
        with pytest.raises(Exception):
            ticker.code = "000660"

    def test_str_is_symbol(self):
        assert str(Ticker.domestic("005930")) == "005930.KS"


class TestAnalysisResult:
    """AnalysisResult 测试类"""

    def test_only_fresh_is_cacheable(self):
        assert AnalysisResult("ok").is_cacheable
        assert not AnalysisResult("x", AnalysisStatus.DEGRADED).is_cacheable
        assert not AnalysisResult("x", AnalysisStatus.PENDING).is_cacheable

    def test_as_cached(self):
        result = AnalysisResult("ok", AnalysisStatus.FRESH, produced_at=10.0)
        cached = result.as_cached()
        assert cached.status == AnalysisStatus.CACHED
        assert cached.text == "ok"
        assert cached.produced_at == 10.0


class TestReplyEnvelope:
    """ReplyEnvelope 测试类"""

    def test_success_flag(self):
        assert ReplyEnvelope("ok").success
        assert not ReplyEnvelope("no", error_code=ErrorCode.SYMBOL_NOT_FOUND).success

    def test_to_dict(self):
        envelope = ReplyEnvelope("ok", ticker=Ticker.domestic("005930"))
        data = envelope.to_dict()
        assert data["error_code"] == "success"
        assert data["ticker"] == "005930.KS"


class TestQuoteSnapshot:

    def test_defaults(self):
        snapshot = QuoteSnapshot(
            ticker=Ticker.domestic("005930"),
            display_name="삼성전자",
            price=Decimal("71500"),
            change=Decimal("1200"),
            change_percent=Decimal("1.71"),
        )
        assert snapshot.currency == "KRW"
        assert snapshot.timestamp is not None


class TestAliases:
    """常用名称映射测试"""

    @pytest.mark.parametrize("name,symbol", [
        ("삼성전자", "005930.KS"),
        ("  삼성전자  ", "005930.KS"),
        ("삼성 전자", "005930.KS"),
        ("하이닉스", "000660.KS"),
        ("SK하이닉스", "000660.KS"),
        ("에코프로", "086520.KQ"),
        ("Apple", "AAPL"),
    ])
    def test_lookup(self, name, symbol):
        assert lookup_alias(name).symbol == symbol

    def test_lookup_is_exact_match_only(self):
        assert lookup_alias("삼성전") is None
        assert lookup_alias("삼성전자우") is None
