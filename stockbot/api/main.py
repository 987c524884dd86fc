"""
StockBot API - 主应用入口

聊天平台技能服务器：根据股票名称或代码返回实时价格和新闻摘要。

特性：
- 多级降级的代码解析和行情获取
- 带时间预算和缓存的新闻摘要
- 平台要求的 200 + 单文本块响应，包括错误情况
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time
import uuid

from stockbot.adapters.http import close_http_session
from stockbot.api.routes import skill_router, health_router
from stockbot.api.dependencies import get_settings, get_service_container
from stockbot.infrastructure.logging import setup_logging, get_logger
from stockbot.presentation import ReplyWriter


SKILL_PATHS = ("/stock",)

logger = get_logger(__name__)
fallback_writer = ReplyWriter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings = get_settings()
    logger.info(f"{settings.APP_NAME} 正在启动 (port {settings.PORT})...")

    # 预热服务容器
    container = None
    try:
        container = get_service_container()
        logger.info("服务容器初始化完成")
    except Exception as e:
        logger.error(f"服务容器初始化失败: {e}")

    yield

    # 关闭前等待后台分析任务写完缓存
    if container is not None:
        pending = await container.analyzer.drain(timeout=settings.ANALYSIS_TIMEOUT)
        if pending:
            logger.warning(f"关闭时仍有 {pending} 个分析任务未完成")
    close_http_session()
    logger.info(f"{settings.APP_NAME} 正在关闭...")


def _skill_error_response() -> JSONResponse:
    envelope = fallback_writer.transient_error()
    return JSONResponse(status_code=200, content=fallback_writer.to_skill_payload(envelope))


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
# StockBot Skill Server

聊天平台股票查询技能。

- `POST /stock`：`{"userRequest": {"utterance": "주식: 삼성전자"}}`
- `GET /health`：服务状态与分析缓存统计
- `GET /live`：存活探针
        """,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # 请求日志中间件
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        # 生成请求 ID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            duration = (time.time() - start_time) * 1000
            logger.info(
                f"[{request_id}] 完成 {response.status_code} - {duration:.2f}ms"
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.2f}ms"

            return response

        except Exception as e:
            duration = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] 错误 - {duration:.2f}ms - {str(e)}"
            )
            raise

    # 请求体格式错误：技能路径仍返回 200 + 回复文本
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        if request.url.path in SKILL_PATHS:
            logger.warning(f"技能请求格式错误: {exc.errors()}")
            return _skill_error_response()
        return await request_validation_exception_handler(request, exc)

    # 全局异常处理
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"未处理的异常: {exc}", exc_info=True)
        if request.url.path in SKILL_PATHS:
            return _skill_error_response()
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error_code": "transient_internal",
                "error_message": "服务器内部错误，请稍后重试",
            },
        )

    # 注册路由
    app.include_router(health_router)
    app.include_router(skill_router)

    return app


# 创建应用实例
app = create_app()


def main():
    """命令行入口"""
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "stockbot.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
