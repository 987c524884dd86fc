"""
API 层 - FastAPI 路由定义

包含：
- /stock: 聊天平台技能入口
- /health: 健康检查
- /live: Kubernetes 存活探针
"""

from stockbot.api.main import app, create_app
from stockbot.api.schemas import (
    SkillRequest,
    SkillResponse,
    HealthResponse,
)
from stockbot.api.dependencies import (
    get_request_handler,
    get_reply_writer,
    get_settings,
    ServiceContainer,
    Settings,
)

__all__ = [
    # 应用
    "app",
    "create_app",
    # 请求/响应模型
    "SkillRequest",
    "SkillResponse",
    "HealthResponse",
    # 依赖
    "get_request_handler",
    "get_reply_writer",
    "get_settings",
    "ServiceContainer",
    "Settings",
]
