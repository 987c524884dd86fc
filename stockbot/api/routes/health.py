"""
健康检查路由 - 系统状态监控 API
"""

from fastapi import APIRouter, Depends
from datetime import datetime

from stockbot.api.schemas import HealthResponse
from stockbot.api.dependencies import get_analyzer, get_settings, Settings
from stockbot.use_cases import AnalysisOrchestrator


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="健康检查",
    description="返回服务状态、分析缓存统计和后台分析任务数"
)
async def health_check(
    analyzer: AnalysisOrchestrator = Depends(get_analyzer),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """健康检查"""
    components = {
        "analysis_cache": analyzer.cache.get_stats_dict(),
        "inflight_analyses": len(analyzer.inflight),
    }

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=settings.APP_VERSION,
        components=components,
    )


@router.get(
    "/live",
    summary="存活检查",
    description="检查服务是否存活（用于 Kubernetes 存活探针）"
)
async def liveness_check():
    """存活检查"""
    return {"alive": True}
