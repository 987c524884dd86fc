"""
技能路由 - 聊天平台 webhook

平台只认 200 + 技能响应格式，所有失败都以回复文本表达。
"""

from fastapi import APIRouter, Depends, Request

from stockbot.api.schemas import SkillRequest, SkillResponse
from stockbot.api.dependencies import get_request_handler, get_reply_writer
from stockbot.orchestrator import RequestHandler
from stockbot.presentation import ReplyWriter


router = APIRouter(tags=["Skill"])


@router.post(
    "/stock",
    response_model=SkillResponse,
    summary="股票查询技能",
    description="""
    接收技能请求 `{"userRequest": {"utterance": "주식: 삼성전자"}}`，
    返回价格和新闻摘要组成的单个 simpleText。
    """
)
async def stock_skill(
    body: SkillRequest,
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    writer: ReplyWriter = Depends(get_reply_writer),
):
    """股票查询"""
    request_id = getattr(request.state, "request_id", None)
    envelope = await handler.handle(body.utterance, request_id=request_id)
    return writer.to_skill_payload(envelope)
