"""
发言解析器 - 从聊天发言中提取股票名称

规则：
1. 去掉命令前缀（주식: / 주식 ）
2. 反复去掉句尾的口语后缀（주가, 시세, 어때, 알려줘, ?, ! ...）
"""

import re
from typing import Optional, Sequence


class UtteranceParser:
    """发言解析器"""

    COMMAND_PREFIX = re.compile(r"^주식\s*[:：]?\s*")

    # 按长度降序匹配，避免短后缀先吃掉长后缀的一部分
    TRAILING_SUFFIXES = (
        "알려줘요", "알려줘", "어때요", "어때", "얼마야", "얼마",
        "주가는", "주가", "시세는", "시세",
        "?", "？", "!", ".",
    )

    def __init__(self, suffixes: Optional[Sequence[str]] = None):
        self.suffixes = sorted(suffixes or self.TRAILING_SUFFIXES, key=len, reverse=True)

    def extract_subject(self, utterance: Optional[str]) -> str:
        """
        提取股票名称

        Args:
            utterance: 原始发言

        Returns:
            str: 股票名称，无内容时返回空字符串
        """
        text = self.COMMAND_PREFIX.sub("", (utterance or "").strip()).strip()

        stripped = True
        while text and stripped:
            stripped = False
            for suffix in self.suffixes:
                if text.endswith(suffix) and len(text) > len(suffix):
                    text = text[: -len(suffix)].rstrip()
                    stripped = True
                    break

        # 只剩标点时视为空
        if text and all(ch in "?？!." for ch in text):
            return ""
        return text
