"""
基础设施层单元测试
"""

import asyncio
import json
import logging

import pytest

from stockbot.domain.models import ErrorCode
from stockbot.infrastructure.cache import CacheConfig, TTLCache
from stockbot.infrastructure.errors import (
    EnrichmentDegradedError,
    QuoteUnavailableError,
    StockBotError,
    SymbolNotFoundError,
)
from stockbot.infrastructure.logging import (
    LogContext,
    SimpleFormatter,
    StructuredFormatter,
    setup_logging,
)
from stockbot.infrastructure.tasks import InFlightRegistry, race_with_background


# ==================== 缓存 ====================

class TestTTLCache:
    """TTLCache 测试类"""

    def test_set_and_get(self, analysis_cache):
        analysis_cache.set("삼성전자", "summary")
        assert analysis_cache.get("삼성전자") == "summary"

    def test_miss(self, analysis_cache):
        assert analysis_cache.get("없음") is None
        assert analysis_cache.stats.misses == 1

    def test_entry_expires_after_ttl(self, analysis_cache, fake_clock):
        analysis_cache.set("삼성전자", "summary")

        fake_clock.advance(899)
        assert analysis_cache.get("삼성전자") == "summary"

        fake_clock.advance(1)
        assert analysis_cache.get("삼성전자") is None
        assert "삼성전자" not in analysis_cache
        assert analysis_cache.stats.expirations == 1

    def test_get_entry_returns_write_time(self, analysis_cache, fake_clock):
        written_at = analysis_cache.set("카카오", "summary")
        value, created_at = analysis_cache.get_entry("카카오")
        assert value == "summary"
        assert created_at == written_at == fake_clock()

    def test_overwrite_refreshes_write_time(self, analysis_cache, fake_clock):
        analysis_cache.set("카카오", "old")
        fake_clock.advance(600)
        analysis_cache.set("카카오", "new")
        fake_clock.advance(600)
        assert analysis_cache.get("카카오") == "new"

    def test_lru_eviction(self, fake_clock):
        cache = TTLCache(CacheConfig(max_size=2, ttl=900), clock=fake_clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert cache.stats.evictions == 1

    def test_stats_dict(self, analysis_cache):
        analysis_cache.set("a", 1)
        analysis_cache.get("a")
        analysis_cache.get("b")
        stats = analysis_cache.get_stats_dict()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["hit_rate"] == 50.0

    def test_clear(self, analysis_cache):
        analysis_cache.set("a", 1)
        analysis_cache.clear()
        assert len(analysis_cache) == 0


# ==================== 异步任务 ====================

class TestRaceWithBackground:
    """race_with_background 测试类"""

    @pytest.mark.asyncio
    async def test_task_finishes_first(self):
        async def quick():
            return "done"

        task = asyncio.ensure_future(quick())
        finished, result = await race_with_background(task, timeout=1.0)
        assert finished
        assert result == "done"

    @pytest.mark.asyncio
    async def test_timer_finishes_first_without_cancelling(self):
        release = asyncio.Event()

        async def slow():
            await release.wait()
            return "late"

        task = asyncio.ensure_future(slow())
        finished, result = await race_with_background(task, timeout=0.01)

        assert not finished
        assert result is None
        assert not task.cancelled()

        release.set()
        assert await task == "late"

    @pytest.mark.asyncio
    async def test_task_exception_propagates(self):
        async def broken():
            raise ValueError("boom")

        task = asyncio.ensure_future(broken())
        with pytest.raises(ValueError):
            await race_with_background(task, timeout=1.0)


class TestInFlightRegistry:
    """InFlightRegistry 测试类"""

    @pytest.mark.asyncio
    async def test_same_key_joins_existing_task(self):
        registry = InFlightRegistry("test")
        release = asyncio.Event()
        calls = []

        async def work():
            calls.append(1)
            await release.wait()
            return "value"

        first, created_first = registry.get_or_start("k", work)
        second, created_second = registry.get_or_start("k", work)

        assert created_first
        assert not created_second
        assert first is second
        assert "k" in registry

        release.set()
        assert await first == "value"
        await asyncio.sleep(0)
        assert len(calls) == 1
        assert "k" not in registry

    @pytest.mark.asyncio
    async def test_new_task_after_completion(self):
        registry = InFlightRegistry("test")

        async def work():
            return 1

        task, _ = registry.get_or_start("k", work)
        await task
        await asyncio.sleep(0)

        _, created = registry.get_or_start("k", work)
        assert created

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks(self):
        registry = InFlightRegistry("test")
        results = []

        async def work():
            await asyncio.sleep(0.01)
            results.append("done")

        registry.get_or_start("a", work)
        registry.get_or_start("b", work)

        pending = await registry.drain(timeout=1.0)
        assert pending == 0
        assert results == ["done", "done"]

    @pytest.mark.asyncio
    async def test_drain_reports_pending(self):
        registry = InFlightRegistry("test")
        release = asyncio.Event()

        async def work():
            await release.wait()

        task, _ = registry.get_or_start("a", work)
        assert await registry.drain(timeout=0.01) == 1

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_drain_empty(self):
        assert await InFlightRegistry().drain() == 0


# ==================== 错误 ====================

class TestErrors:
    """异常层次测试"""

    def test_symbol_not_found(self):
        error = SymbolNotFoundError("없는회사")
        assert error.error_code == ErrorCode.SYMBOL_NOT_FOUND
        assert error.subject == "없는회사"
        assert isinstance(error, StockBotError)

    def test_quote_unavailable(self):
        error = QuoteUnavailableError("005930.KS", attempted=["005930.KS", "005930.KQ"])
        data = error.to_dict()
        assert data["error_code"] == "source_exhausted"
        assert data["details"]["attempted"] == ["005930.KS", "005930.KQ"]

    def test_enrichment_degraded_keeps_user_message(self):
        error = EnrichmentDegradedError("no_news", "분석할 최신 뉴스가 없습니다.")
        assert error.error_code == ErrorCode.ENRICHMENT_DEGRADED
        assert error.user_message == "분석할 최신 뉴스가 없습니다."
        assert error.reason == "no_news"


# ==================== 日志 ====================

class TestLogging:
    """日志格式化测试"""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="stockbot.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="조회 완료",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_structured_formatter(self):
        output = StructuredFormatter().format(
            self._record(request_id="req-1", duration_ms=12.5, extra_data={"ticker": "005930.KS"})
        )
        data = json.loads(output)
        assert data["message"] == "조회 완료"
        assert data["logger"] == "stockbot.test"
        assert data["request_id"] == "req-1"
        assert data["duration_ms"] == 12.5
        assert data["data"] == {"ticker": "005930.KS"}

    def test_simple_formatter(self):
        output = SimpleFormatter().format(self._record(request_id="req-1"))
        assert "조회 완료" in output
        assert "req-1" in output

    def test_log_context_measures_elapsed(self):
        logger = logging.getLogger("stockbot.test.context")
        with LogContext(logger, "op", request_id="req-1") as ctx:
            pass
        assert ctx.elapsed_ms >= 0

    def test_log_context_does_not_swallow(self):
        logger = logging.getLogger("stockbot.test.context")
        with pytest.raises(RuntimeError):
            with LogContext(logger, "op"):
                raise RuntimeError("fail")

    def test_setup_logging_installs_single_stdout_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(level="debug", json_format=True)
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            handler = root.handlers[0]
            assert isinstance(handler, logging.StreamHandler)
            assert not isinstance(handler, logging.FileHandler)
            assert isinstance(handler.formatter, StructuredFormatter)
            assert logging.getLogger("yfinance").level == logging.CRITICAL
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
