"""
依赖注入 - FastAPI 依赖配置

集中管理所有服务的创建和注入，
确保单一实例和正确的生命周期管理。
"""

from functools import lru_cache
from typing import Optional
import os

from dotenv import load_dotenv

from stockbot.adapters.yfinance_adapter import YFinanceAdapter
from stockbot.adapters.yahoo_chart_adapter import YahooChartHTTPAdapter
from stockbot.adapters.google_news_adapter import GoogleNewsAdapter
from stockbot.adapters.system_time_adapter import SystemTimeAdapter
from stockbot.adapters.llm_adapter import LiteLLMAdapter
from stockbot.infrastructure.cache import CacheConfig, TTLCache
from stockbot.orchestrator import RequestHandler
from stockbot.presentation import ReplyWriter
from stockbot.use_cases import AnalysisOrchestrator, QuoteFetcher, SymbolResolver


load_dotenv()


# 配置类
class Settings:
    """应用配置"""

    # 基本配置
    APP_NAME: str = os.getenv('APP_NAME', 'StockBot Skill Server')
    APP_VERSION: str = os.getenv('APP_VERSION', '1.0.0')
    DEBUG: bool = os.getenv('DEBUG', 'false').lower() == 'true'

    # 服务配置
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', '3000'))

    # 日志配置
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON: bool = os.getenv('LOG_JSON', 'false').lower() == 'true'

    # LLM 配置
    LLM_PROVIDER: str = os.getenv('LLM_PROVIDER', 'gemini')
    LLM_MODEL: str = os.getenv('LLM_MODEL', 'gemini-2.0-flash')
    LLM_API_KEY: Optional[str] = os.getenv('GEMINI_API_KEY')
    LLM_API_BASE: Optional[str] = os.getenv('LLM_API_BASE')

    # 超时配置（秒），分析预算须小于平台 5 秒期限
    ANALYSIS_TIMEOUT: float = float(os.getenv('ANALYSIS_TIMEOUT', '3.5'))
    NEWS_TIMEOUT: float = float(os.getenv('NEWS_TIMEOUT', '2.5'))
    TICKER_NEWS_TIMEOUT: float = float(os.getenv('TICKER_NEWS_TIMEOUT', '3.0'))
    QUOTE_HTTP_TIMEOUT: float = float(os.getenv('QUOTE_HTTP_TIMEOUT', '5'))

    # 缓存配置
    ANALYSIS_CACHE_TTL: float = float(os.getenv('ANALYSIS_CACHE_TTL', '900'))
    ANALYSIS_CACHE_SIZE: int = int(os.getenv('ANALYSIS_CACHE_SIZE', '500'))


@lru_cache()
def get_settings() -> Settings:
    """获取应用配置"""
    return Settings()


class ServiceContainer:
    """
    服务容器 - 管理所有服务实例

    采用单例模式确保服务实例（尤其是分析缓存）的复用
    """

    _instance: Optional['ServiceContainer'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings: Optional[Settings] = None):
        if self._initialized:
            return

        settings = settings or get_settings()

        # 初始化适配器
        self._yfinance = YFinanceAdapter()
        self._http_chart = YahooChartHTTPAdapter(timeout=settings.QUOTE_HTTP_TIMEOUT)
        self._news = GoogleNewsAdapter(timeout=settings.NEWS_TIMEOUT)
        self._time = SystemTimeAdapter()
        self._llm = LiteLLMAdapter(
            provider=settings.LLM_PROVIDER,
            model=settings.LLM_MODEL,
            api_key=settings.LLM_API_KEY,
            api_base=settings.LLM_API_BASE,
        )

        # 分析缓存
        self._cache: TTLCache = TTLCache(
            CacheConfig(max_size=settings.ANALYSIS_CACHE_SIZE, ttl=settings.ANALYSIS_CACHE_TTL),
            clock=self._time.now,
        )

        # 初始化用例
        self._resolver = SymbolResolver(
            news_port=self._news,
            search_port=self._yfinance,
            feed_timeout=settings.TICKER_NEWS_TIMEOUT,
        )
        self._fetcher = QuoteFetcher(
            quote_port=self._yfinance,
            chart_port=self._yfinance,  # YFinanceAdapter 同时实现 ChartPort
            http_chart_port=self._http_chart,
        )
        self._analyzer = AnalysisOrchestrator(
            news_port=self._news,
            summarizer_port=self._llm,
            cache=self._cache,
            timeout=settings.ANALYSIS_TIMEOUT,
            news_timeout=settings.NEWS_TIMEOUT,
        )

        # 初始化请求处理器
        self._writer = ReplyWriter()
        self._handler = RequestHandler(
            resolver=self._resolver,
            fetcher=self._fetcher,
            analyzer=self._analyzer,
            writer=self._writer,
        )

        self._initialized = True

    @property
    def handler(self) -> RequestHandler:
        """获取请求处理器"""
        return self._handler

    @property
    def analyzer(self) -> AnalysisOrchestrator:
        """获取新闻分析编排器"""
        return self._analyzer

    @property
    def reply_writer(self) -> ReplyWriter:
        """获取回复生成器"""
        return self._writer

    @property
    def cache(self) -> TTLCache:
        """获取分析缓存"""
        return self._cache


@lru_cache()
def get_service_container() -> ServiceContainer:
    """
    获取服务容器单例

    使用 lru_cache 确保只创建一次
    """
    return ServiceContainer()


def get_request_handler() -> RequestHandler:
    """FastAPI 依赖：获取请求处理器"""
    return get_service_container().handler


def get_reply_writer() -> ReplyWriter:
    """FastAPI 依赖：获取回复生成器"""
    return get_service_container().reply_writer


def get_analyzer() -> AnalysisOrchestrator:
    """FastAPI 依赖：获取新闻分析编排器"""
    return get_service_container().analyzer
