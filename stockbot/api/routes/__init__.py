"""
路由包初始化
"""

from stockbot.api.routes.skill import router as skill_router
from stockbot.api.routes.health import router as health_router

__all__ = [
    "skill_router",
    "health_router",
]
