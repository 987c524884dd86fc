"""
表现层 - 回复文本与聊天平台响应格式

包含：
- ReplyWriter: 价格头部、错误文本、技能响应封装
"""

from stockbot.presentation.reply_writer import ReplyWriter, format_number

__all__ = [
    "ReplyWriter",
    "format_number",
]
