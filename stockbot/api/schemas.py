"""
API 请求/响应模型 - Pydantic Schema 定义

技能请求的字段很多且随平台版本变化，这里只声明用到的部分，
其余字段一律忽略；缺失字段不报错，由处理器给出友好回复。
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


# ==================== 请求模型 ====================

class UserRequest(BaseModel):
    """用户发言部分"""
    model_config = ConfigDict(extra="ignore")

    utterance: Optional[str] = Field(
        default=None,
        description="用户发言，如 '주식: 삼성전자' 或 '005930'"
    )


class SkillRequest(BaseModel):
    """技能服务器请求"""
    model_config = ConfigDict(extra="ignore")

    userRequest: Optional[UserRequest] = Field(
        default=None,
        description="用户请求"
    )

    @property
    def utterance(self) -> Optional[str]:
        return self.userRequest.utterance if self.userRequest else None


# ==================== 响应模型 ====================

class SimpleText(BaseModel):
    text: str


class SkillOutput(BaseModel):
    simpleText: SimpleText


class SkillTemplate(BaseModel):
    outputs: List[SkillOutput]


class SkillResponse(BaseModel):
    """技能服务器响应：恰好一个 simpleText"""
    version: str = "2.0"
    template: SkillTemplate


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str = Field(..., description="服务状态")
    timestamp: datetime = Field(..., description="检查时间")
    version: str = Field(..., description="API 版本")
    components: Dict[str, Any] = Field(default_factory=dict, description="组件状态")
