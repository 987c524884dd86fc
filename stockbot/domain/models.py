"""
核心领域模型 - 股票应答机器人的实体和值对象

设计原则：
1. 不可变性：值对象使用 frozen=True
2. 可直接使用：Ticker 生成的 symbol 可直接交给行情数据源
3. 一致性：手动计算的涨跌额和涨跌幅来自同一组 price/previous_close
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any


# ==================== 枚举类型 ====================

class Market(str, Enum):
    """市场"""
    DOMESTIC = "domestic"            # 韩国本土市场
    INTERNATIONAL = "international"  # 其他市场（原样使用代码）


class Board(str, Enum):
    """本土市场板块，二者共用 6 位数字代码，后缀不同"""
    MAIN = "KS"   # KOSPI 主板
    ALT = "KQ"    # KOSDAQ


class AnalysisStatus(str, Enum):
    """分析结果状态"""
    FRESH = "fresh"          # 本次新生成
    CACHED = "cached"        # 命中缓存
    DEGRADED = "degraded"    # 降级（错误说明文本）
    PENDING = "pending"      # 超时占位文本，后台仍在计算


class ErrorCode(str, Enum):
    """错误码"""
    SUCCESS = "success"
    INVALID_INPUT = "invalid_input"
    SYMBOL_NOT_FOUND = "symbol_not_found"
    SOURCE_EXHAUSTED = "source_exhausted"
    ENRICHMENT_DEGRADED = "enrichment_degraded"
    TRANSIENT_INTERNAL = "transient_internal"


DOMESTIC_CODE_PATTERN = re.compile(r"^[0-9]{6}$")
DOMESTIC_SYMBOL_PATTERN = re.compile(r"^([0-9]{6})\.(KS|KQ)$")


# ==================== 值对象 ====================

@dataclass(frozen=True)
class Ticker:
    """
    规范化的股票代码

    本土市场：code 为 6 位数字，board 决定后缀（.KS / .KQ）
    其他市场：code 即完整代码（如 AAPL），board 无意义
    """
    market: Market
    code: str
    board: Optional[Board] = None

    @classmethod
    def domestic(cls, code: str, board: Board = Board.MAIN) -> "Ticker":
        """创建本土市场代码"""
        return cls(market=Market.DOMESTIC, code=code, board=board)

    @classmethod
    def international(cls, symbol: str) -> "Ticker":
        """创建其他市场代码"""
        return cls(market=Market.INTERNATIONAL, code=symbol)

    @classmethod
    def parse(cls, symbol: str) -> "Ticker":
        """
        从数据源格式的代码解析

        NNNNNN.KS / NNNNNN.KQ 识别为本土市场，其余原样保留。
        """
        match = DOMESTIC_SYMBOL_PATTERN.match(symbol)
        if match:
            return cls.domestic(match.group(1), Board(match.group(2)))
        return cls.international(symbol)

    @property
    def symbol(self) -> str:
        """数据源可直接使用的代码"""
        if self.market == Market.DOMESTIC:
            return f"{self.code}.{self.board.value}"
        return self.code

    @property
    def is_domestic_main(self) -> bool:
        return self.market == Market.DOMESTIC and self.board == Board.MAIN

    def with_board(self, board: Board) -> "Ticker":
        """同一代码在另一板块的对应代码"""
        return Ticker.domestic(self.code, board)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class RawQuote:
    """行情端口返回的原始数据，字段可能不完整"""
    price: Optional[float]
    previous_close: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    currency: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class QuoteSnapshot:
    """某一时刻的价格快照"""
    ticker: Ticker
    display_name: str
    price: Decimal
    change: Decimal
    change_percent: Decimal
    currency: str = "KRW"
    source: str = "Yahoo Finance"
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class NewsItem:
    """新闻条目"""
    title: str
    link: Optional[str] = None


@dataclass(frozen=True)
class AnalysisResult:
    """新闻分析结果（格式化文本）"""
    text: str
    status: AnalysisStatus = AnalysisStatus.FRESH
    produced_at: Optional[float] = None

    @property
    def is_cacheable(self) -> bool:
        return self.status == AnalysisStatus.FRESH

    def as_cached(self) -> "AnalysisResult":
        return AnalysisResult(
            text=self.text,
            status=AnalysisStatus.CACHED,
            produced_at=self.produced_at,
        )


@dataclass(frozen=True)
class ReplyEnvelope:
    """对外回复：始终只有一个文本块"""
    text: str
    error_code: ErrorCode = ErrorCode.SUCCESS
    ticker: Optional[Ticker] = None

    @property
    def success(self) -> bool:
        return self.error_code == ErrorCode.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典（用于日志）"""
        return {
            "text": self.text,
            "error_code": self.error_code.value,
            "ticker": self.ticker.symbol if self.ticker else None,
        }


NewsDigest = List[NewsItem]
