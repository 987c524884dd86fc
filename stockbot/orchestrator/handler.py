"""
请求处理器 - 单条发言到单条回复的编排

设计原则：
1. 从不抛出：所有失败都转换为用户可读的回复
2. 结构化并发：行情和分析同时启动，等待两者都结束
3. 从不部分成功：没有价格时丢弃分析结果
"""

import asyncio
import uuid
from typing import Optional

from stockbot.domain.models import ReplyEnvelope
from stockbot.infrastructure.errors import QuoteUnavailableError, SymbolNotFoundError
from stockbot.infrastructure.logging import LogContext, get_logger
from stockbot.orchestrator.router import UtteranceParser
from stockbot.presentation.reply_writer import ReplyWriter
from stockbot.use_cases.analyze_news import AnalysisOrchestrator
from stockbot.use_cases.fetch_quote import QuoteFetcher
from stockbot.use_cases.resolve_symbol import SymbolResolver


logger = get_logger(__name__)


class RequestHandler:
    """
    请求处理器

    输入：聊天发言
    输出：ReplyEnvelope（恰好一个文本块）
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        fetcher: QuoteFetcher,
        analyzer: AnalysisOrchestrator,
        writer: Optional[ReplyWriter] = None,
        parser: Optional[UtteranceParser] = None,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.analyzer = analyzer
        self.writer = writer or ReplyWriter()
        self.parser = parser or UtteranceParser()

    async def handle(self, utterance: Optional[str], request_id: Optional[str] = None) -> ReplyEnvelope:
        """处理一条发言，不抛出异常"""
        request_id = request_id or str(uuid.uuid4())[:8]

        try:
            with LogContext(logger, "handle_utterance", request_id=request_id, utterance=utterance):
                envelope = await self._handle(utterance)
        except Exception:
            return self.writer.transient_error()

        logger.info(
            f"[Request] 回复 {envelope.error_code.value}",
            extra={'request_id': request_id, 'extra_data': envelope.to_dict()},
        )
        return envelope

    async def _handle(self, utterance: Optional[str]) -> ReplyEnvelope:
        subject = self.parser.extract_subject(utterance)
        if not subject:
            return self.writer.empty_subject()

        logger.info(f"[Request] stockName: [{subject}]")

        try:
            ticker = await self.resolver.resolve(subject)
        except SymbolNotFoundError:
            return self.writer.not_found(subject)

        quote_task = asyncio.ensure_future(self.fetcher.fetch(ticker))
        analysis_task = asyncio.ensure_future(self.analyzer.analyze(subject))
        snapshot, analysis = await asyncio.gather(
            quote_task, analysis_task, return_exceptions=True
        )

        if isinstance(snapshot, QuoteUnavailableError):
            return self.writer.quote_unavailable(ticker)
        if isinstance(snapshot, BaseException):
            raise snapshot

        if isinstance(analysis, BaseException):
            # 分析编排器本身不抛出，这里只处理意外
            logger.error(f"[Request] 分析意外失败: {analysis}")
            return self.writer.transient_error(ticker)

        return self.writer.quote_reply(snapshot, analysis.text)
