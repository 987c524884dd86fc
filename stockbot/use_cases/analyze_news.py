"""
新闻分析用例 - 在固定时间预算内返回新闻摘要

流程：
1. 缓存命中直接返回，不发起任何外部调用
2. 启动（或加入进行中的）增强任务：新闻源 -> 标题 -> 生成式摘要
3. 增强任务与计时器竞速；超时返回占位文本，任务继续在后台运行并写缓存
4. 任何失败都折叠为降级文本，绝不向上抛出
"""

import asyncio
from typing import Optional

from stockbot.domain.models import AnalysisResult, AnalysisStatus, NewsDigest
from stockbot.infrastructure.cache import TTLCache
from stockbot.infrastructure.errors import EnrichmentDegradedError
from stockbot.infrastructure.logging import get_logger
from stockbot.infrastructure.tasks import InFlightRegistry, race_with_background
from stockbot.ports.interfaces import (
    NewsFeedPort,
    PortError,
    QuotaExceededError,
    RateLimitError,
    SummarizerPort,
)
from stockbot.use_cases.news_digest import extract_headlines


logger = get_logger(__name__)

PENDING_TEXT = "뉴스 분석 중입니다. 잠시 후 주가와 함께 다시 확인해주세요."
NO_NEWS_TEXT = "분석할 최신 뉴스가 없습니다."
FEED_ERROR_TEXT = "현재 뉴스 분석 데이터를 가져올 수 없습니다."
QUOTA_TEXT = "AI 분석 사용량이 초과되어 뉴스 제목을 우선 전달합니다."
RATE_LIMIT_TEXT = "AI 분석 요청이 많아 뉴스 제목을 우선 전달합니다."
SUMMARIZER_DOWN_TEXT = "현재 AI 분석 서비스 연결이 원활하지 않아 뉴스 제목을 우선 전달합니다."
TRANSIENT_TEXT = "일시적인 오류로 뉴스 분석을 완료하지 못했습니다."


def format_links(headlines: NewsDigest, limit: int = 2) -> str:
    """格式化相关链接段落"""
    lines = ["🔗 관련 링크:"]
    for item in headlines[:limit]:
        lines.append(f"- {item.title}")
        if item.link:
            lines.append(f"  {item.link}")
    return "\n".join(lines)


class AnalysisOrchestrator:
    """
    新闻分析编排器

    输入：股票名称
    输出：AnalysisResult（保证在 timeout 内返回）
    """

    SUMMARY_PROMPT = """다음은 주식 '{name}'의 최신 뉴스 제목들입니다.
다음 형식을 엄격히 지켜서 딱 3줄로 응답해줘 (한국어):
1. 긍정적인 내용 요약 (1줄, 📢 긍정: [내용])
2. 부정적인 내용 요약 (1줄, ⚠️ 부정: [내용])
3. 뉴스 기반 매수, 매도, 보류 판단 비율 (1줄, 📊 투자 의견: 매수 00%, 매도 00%, 보류 00%)

뉴스 제목:
{headlines}"""

    def __init__(
        self,
        news_port: NewsFeedPort,
        summarizer_port: SummarizerPort,
        cache: TTLCache,
        timeout: float = 3.5,
        news_timeout: float = 2.5,
        headline_limit: int = 4,
        link_limit: int = 2,
        max_tokens: int = 300,
        temperature: float = 0.3,
    ):
        """
        初始化编排器

        Args:
            news_port: 新闻源端口
            summarizer_port: 生成式摘要端口
            cache: 分析结果缓存（名称 -> AnalysisResult）
            timeout: 总时间预算（秒），须小于上游 5 秒期限
            news_timeout: 新闻源子超时（秒）
            headline_limit: 送入摘要的标题数
            link_limit: 回复中附带的链接数
            max_tokens: 摘要输出长度上限
            temperature: 摘要采样温度
        """
        self.news = news_port
        self.summarizer = summarizer_port
        self.cache = cache
        self.timeout = timeout
        self.news_timeout = news_timeout
        self.headline_limit = headline_limit
        self.link_limit = link_limit
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.inflight: InFlightRegistry[AnalysisResult] = InFlightRegistry("analysis")

    async def analyze(self, subject: str) -> AnalysisResult:
        """执行新闻分析，不抛出异常"""
        key = subject.strip()

        cached: Optional[AnalysisResult] = self.cache.get(key)
        if cached is not None:
            logger.info(f"[Analysis] 缓存命中: {key}")
            return cached.as_cached()

        try:
            task, created = self.inflight.get_or_start(key, lambda: self._enrich(key))
            if not created:
                logger.info(f"[Analysis] 加入进行中的分析: {key}")
            finished, result = await race_with_background(task, self.timeout)
        except Exception as e:
            logger.error(f"[Analysis] 编排失败: {key}: {e}", exc_info=True)
            return AnalysisResult(text=TRANSIENT_TEXT, status=AnalysisStatus.DEGRADED)

        if finished:
            return result

        logger.warning(f"[Analysis] {self.timeout}s 内未完成，返回占位文本: {key}")
        return AnalysisResult(text=PENDING_TEXT, status=AnalysisStatus.PENDING)

    async def drain(self, timeout: Optional[float] = None) -> int:
        """等待后台分析任务结束，返回仍未完成的数量"""
        return await self.inflight.drain(timeout)

    async def _enrich(self, subject: str) -> AnalysisResult:
        """增强任务：成功时写缓存（即使请求已先行返回）"""
        try:
            text = await self._build_analysis(subject)
        except EnrichmentDegradedError as e:
            logger.warning(f"[Analysis] {subject}: {e.message}")
            return AnalysisResult(text=e.user_message, status=AnalysisStatus.DEGRADED)
        except Exception as e:
            logger.error(f"[Analysis] {subject} 意外错误: {e}", exc_info=True)
            return AnalysisResult(text=TRANSIENT_TEXT, status=AnalysisStatus.DEGRADED)

        result = AnalysisResult(
            text=text,
            status=AnalysisStatus.FRESH,
            produced_at=self.cache.clock(),
        )
        self.cache.set(subject, result)
        logger.info(f"[Analysis] 分析完成并缓存: {subject}")
        return result

    async def _build_analysis(self, subject: str) -> str:
        headlines = await self._fetch_headlines(subject)
        links = format_links(headlines, self.link_limit)

        prompt = self.SUMMARY_PROMPT.format(
            name=subject,
            headlines="\n".join(item.title for item in headlines),
        )
        try:
            summary = await asyncio.to_thread(
                self.summarizer.complete,
                prompt,
                self.max_tokens,
                self.temperature,
            )
        except QuotaExceededError as e:
            raise EnrichmentDegradedError(f"quota_exceeded: {e}", f"{QUOTA_TEXT}\n\n{links}")
        except RateLimitError as e:
            raise EnrichmentDegradedError(f"rate_limited: {e}", f"{RATE_LIMIT_TEXT}\n\n{links}")
        except PortError as e:
            raise EnrichmentDegradedError(
                f"summarizer_unavailable: {e}",
                f"{SUMMARIZER_DOWN_TEXT}\n\n{links}",
            )

        return f"{summary.strip()}\n\n{links}"

    async def _fetch_headlines(self, subject: str) -> NewsDigest:
        try:
            feed_text = await asyncio.wait_for(
                asyncio.to_thread(self.news.fetch_feed, subject, self.news_timeout),
                timeout=self.news_timeout,
            )
        except asyncio.TimeoutError:
            raise EnrichmentDegradedError("feed_timeout", FEED_ERROR_TEXT)
        except PortError as e:
            raise EnrichmentDegradedError(f"feed_error: {e}", FEED_ERROR_TEXT)

        headlines = extract_headlines(feed_text, limit=self.headline_limit)
        if not headlines:
            raise EnrichmentDegradedError("no_news", NO_NEWS_TEXT)
        return headlines
