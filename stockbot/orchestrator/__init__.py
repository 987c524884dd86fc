"""
编排层 - 发言解析与请求编排

包含：
- UtteranceParser: 从发言中提取股票名称
- RequestHandler: 解析 -> 行情 + 分析 -> 回复
"""

from stockbot.orchestrator.router import UtteranceParser
from stockbot.orchestrator.handler import RequestHandler

__all__ = [
    "UtteranceParser",
    "RequestHandler",
]
