"""
行情获取用例 - 对同一代码按数据源降级获取价格快照

策略顺序（成本和脆弱性递增）：
1. 结构化行情（字段最全）
2. 图表元数据（客户端库）
3. 图表元数据（直接 HTTP，客户端库被拦截时使用）

本土主板代码全部失败后，对 KOSDAQ 同代码重跑一次整条链，仅一次。
"""

import asyncio
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from stockbot.domain.models import Board, Market, QuoteSnapshot, RawQuote, Ticker
from stockbot.infrastructure.errors import QuoteUnavailableError
from stockbot.infrastructure.logging import get_logger
from stockbot.ports.interfaces import ChartPort, QuotePort
from stockbot.use_cases.base import FallbackChain, Strategy


logger = get_logger(__name__)

TWO_PLACES = Decimal("0.01")


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def _quantize(value: Decimal) -> Decimal:
    quantized = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    # 从负方向舍入到 0 时会得到 -0.00
    return quantized.copy_abs() if quantized.is_zero() else quantized


def compute_change(price: float, previous_close: float):
    """
    由现价和昨收计算 (涨跌额, 涨跌幅%)

    两个值都来自同一组输入，不与数据源提供的字段混用。
    """
    price_d = _to_decimal(price)
    prev_d = _to_decimal(previous_close)
    change = price_d - prev_d
    change_percent = change / prev_d * 100
    return change, change_percent


def build_snapshot(
    ticker: Ticker,
    raw: RawQuote,
    source: str,
    use_source_change: bool = True,
) -> Optional[QuoteSnapshot]:
    """
    把原始行情规范化为快照

    Returns:
        Optional[QuoteSnapshot]: 缺少价格或无法得出涨跌时返回 None
    """
    if raw.price is None:
        return None

    if use_source_change and raw.change is not None and raw.change_percent is not None:
        change = _to_decimal(raw.change)
        change_percent = _to_decimal(raw.change_percent)
    elif raw.previous_close:
        change, change_percent = compute_change(raw.price, raw.previous_close)
    else:
        return None

    return QuoteSnapshot(
        ticker=ticker,
        display_name=raw.name or ticker.symbol,
        price=_to_decimal(raw.price),
        change=_quantize(change),
        change_percent=_quantize(change_percent),
        currency=raw.currency or ("KRW" if ticker.market == Market.DOMESTIC else "USD"),
        source=source,
    )


class StructuredQuoteStrategy(Strategy[Ticker, QuoteSnapshot]):
    name = "quote"

    def __init__(self, quote_port: QuotePort):
        self.port = quote_port

    async def attempt(self, value: Ticker) -> Optional[QuoteSnapshot]:
        raw = await asyncio.to_thread(self.port.quote, value.symbol)
        return build_snapshot(value, raw, source=self.name)


class ChartStrategy(Strategy[Ticker, QuoteSnapshot]):
    """图表元数据只有现价和昨收，涨跌始终手动计算"""

    def __init__(self, chart_port: ChartPort, name: str = "chart"):
        self.port = chart_port
        self.name = name

    async def attempt(self, value: Ticker) -> Optional[QuoteSnapshot]:
        raw = await asyncio.to_thread(self.port.chart, value.symbol)
        return build_snapshot(value, raw, source=self.name, use_source_change=False)


class QuoteFetcher:
    """
    行情获取器

    输入：Ticker
    输出：QuoteSnapshot
    """

    def __init__(
        self,
        quote_port: QuotePort,
        chart_port: ChartPort,
        http_chart_port: ChartPort,
    ):
        """
        初始化行情获取器

        Args:
            quote_port: 结构化行情端口
            chart_port: 图表元数据端口（客户端库）
            http_chart_port: 图表元数据端口（直接 HTTP）
        """
        self.chain: FallbackChain[Ticker, QuoteSnapshot] = FallbackChain(
            "QuoteFetcher",
            [
                StructuredQuoteStrategy(quote_port),
                ChartStrategy(chart_port, name="chart"),
                ChartStrategy(http_chart_port, name="chart_http"),
            ],
        )

    async def fetch(self, ticker: Ticker) -> QuoteSnapshot:
        """
        获取价格快照

        Raises:
            QuoteUnavailableError: 所有策略及一次跨板块重试均失败
        """
        attempted = [ticker.symbol]
        snapshot = await self.chain.run(ticker)
        if snapshot is not None:
            return snapshot

        if ticker.is_domestic_main:
            alt_ticker = ticker.with_board(Board.ALT)
            logger.info(f"[StockPrice] {ticker} 失败，改用 {alt_ticker} 重试")
            attempted.append(alt_ticker.symbol)
            snapshot = await self.chain.run(alt_ticker)
            if snapshot is not None:
                return snapshot

        logger.error(f"[StockPrice] 所有数据源均失败: {attempted}")
        raise QuoteUnavailableError(ticker.symbol, attempted=attempted)
