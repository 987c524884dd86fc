"""
回复生成器 - 把价格快照和分析文本组合为聊天回复

设计原则：
1. 单一文本块：每个请求只产生一个 simpleText
2. 从不部分成功：没有价格时不输出价格行
3. 平台限制：文本超过 simpleText 上限时截断
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from stockbot.domain.models import ErrorCode, QuoteSnapshot, ReplyEnvelope, Ticker


SKILL_VERSION = "2.0"
MAX_TEXT_LENGTH = 1000
TRUNCATION_SUFFIX = "..."

EMPTY_SUBJECT_TEXT = "종목명을 입력해주세요."
NOT_FOUND_TEMPLATE = "'{name}' 종목을 찾을 수 없습니다. (예: 005930 또는 삼성전자)"
QUOTE_UNAVAILABLE_TEMPLATE = "'{ticker}' 정보를 가져오지 못했습니다. 잠시 후 다시 조회를 부탁드립니다."
TRANSIENT_ERROR_TEXT = "일시적인 오류가 발생했습니다. 잠시 후 다시 시도해주세요."


def format_number(value: Decimal) -> str:
    """千位分隔，最多两位小数，去掉多余的 0"""
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def change_marker(change: Decimal) -> str:
    if change > 0:
        return "▲"
    if change < 0:
        return "▼"
    return "-"


class ReplyWriter:
    """回复生成器"""

    def __init__(self, max_length: int = MAX_TEXT_LENGTH):
        self.max_length = max_length

    def price_header(self, snapshot: QuoteSnapshot) -> str:
        """
        价格头部三行

        📈 삼성전자 (005930.KS)
        현재가: 71,500 KRW
        변동: ▲ 1,200 (1.71%)
        """
        return (
            f"📈 {snapshot.display_name} ({snapshot.ticker.symbol})\n"
            f"현재가: {format_number(snapshot.price)} {snapshot.currency}\n"
            f"변동: {change_marker(snapshot.change)} {format_number(abs(snapshot.change))} "
            f"({snapshot.change_percent:.2f}%)"
        )

    def quote_reply(self, snapshot: QuoteSnapshot, analysis_text: str) -> ReplyEnvelope:
        text = f"{self.price_header(snapshot)}\n\n{analysis_text}"
        return ReplyEnvelope(text=text, ticker=snapshot.ticker)

    def empty_subject(self) -> ReplyEnvelope:
        return ReplyEnvelope(text=EMPTY_SUBJECT_TEXT, error_code=ErrorCode.INVALID_INPUT)

    def not_found(self, name: str) -> ReplyEnvelope:
        return ReplyEnvelope(
            text=NOT_FOUND_TEMPLATE.format(name=name),
            error_code=ErrorCode.SYMBOL_NOT_FOUND,
        )

    def quote_unavailable(self, ticker: Ticker) -> ReplyEnvelope:
        return ReplyEnvelope(
            text=QUOTE_UNAVAILABLE_TEMPLATE.format(ticker=ticker.symbol),
            error_code=ErrorCode.SOURCE_EXHAUSTED,
            ticker=ticker,
        )

    def transient_error(self, ticker: Optional[Ticker] = None) -> ReplyEnvelope:
        return ReplyEnvelope(
            text=TRANSIENT_ERROR_TEXT,
            error_code=ErrorCode.TRANSIENT_INTERNAL,
            ticker=ticker,
        )

    def truncate(self, text: str) -> str:
        if len(text) <= self.max_length:
            return text
        return text[: self.max_length - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX

    def to_skill_payload(self, envelope: ReplyEnvelope) -> Dict[str, Any]:
        """转换为技能服务器响应格式"""
        return {
            "version": SKILL_VERSION,
            "template": {
                "outputs": [
                    {"simpleText": {"text": self.truncate(envelope.text)}}
                ]
            },
        }
