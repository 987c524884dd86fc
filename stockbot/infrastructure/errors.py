"""
错误处理 - 应用层异常定义

异常层次与 ErrorCode 一一对应：
- SymbolNotFoundError: 无法解析股票代码（终止，直接告知用户）
- QuoteUnavailableError: 所有行情策略及一次跨板块重试均失败（终止）
- EnrichmentDegradedError: 新闻或摘要失败（非终止，折叠为降级文本）
- 其他任何异常在请求处理边界统一视为 TRANSIENT_INTERNAL
"""

from typing import Any, Dict, Optional

from stockbot.domain.models import ErrorCode


class StockBotError(Exception):
    """应用基础异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.TRANSIENT_INTERNAL,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class SymbolNotFoundError(StockBotError):
    """股票代码未找到"""

    def __init__(self, subject: str):
        super().__init__(
            message=f"无法解析股票代码: '{subject}'",
            error_code=ErrorCode.SYMBOL_NOT_FOUND,
            details={"subject": subject}
        )
        self.subject = subject


class QuoteUnavailableError(StockBotError):
    """行情数据源全部失败"""

    def __init__(self, symbol: str, attempted: Optional[list] = None):
        super().__init__(
            message=f"所有行情数据源均无法获取 '{symbol}'",
            error_code=ErrorCode.SOURCE_EXHAUSTED,
            details={"symbol": symbol, "attempted": attempted or []}
        )
        self.symbol = symbol


class EnrichmentDegradedError(StockBotError):
    """新闻分析降级，携带面向用户的说明文本"""

    def __init__(self, reason: str, user_message: str):
        super().__init__(
            message=f"新闻分析降级: {reason}",
            error_code=ErrorCode.ENRICHMENT_DEGRADED,
            details={"reason": reason}
        )
        self.reason = reason
        self.user_message = user_message
