"""
LLM 适配器 - 实现 SummarizerPort

使用 LiteLLM 调用生成式模型（默认 Gemini），
并把频率限制和配额耗尽转换为不同的端口异常。
"""

from typing import Optional

from litellm import completion
from litellm.exceptions import RateLimitError as LiteLLMRateLimitError

from stockbot.ports.interfaces import (
    SummarizerPort,
    DataUnavailableError,
    RateLimitError,
    QuotaExceededError,
)


QUOTA_MARKERS = ("insufficient_quota", "quota")
# Gemini 的分钟级限流同样报 RESOURCE_EXHAUSTED / Quota exceeded，只能按时间窗口区分
RATE_WINDOW_MARKERS = ("perminute", "per minute", "per_minute")


def is_quota_exhausted(message: str) -> bool:
    """限流错误是否属于配额耗尽（而非短时间窗口限流）"""
    lowered = message.lower()
    if any(marker in lowered for marker in RATE_WINDOW_MARKERS):
        return False
    return any(marker in lowered for marker in QUOTA_MARKERS)


class LiteLLMAdapter(SummarizerPort):
    """
    LiteLLM 适配器

    实现 SummarizerPort 接口，提供新闻摘要生成。
    """

    def __init__(
        self,
        provider: str = "gemini",
        model: str = "gemini-2.0-flash",
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        初始化适配器

        Args:
            provider: LLM 提供商
            model: 模型名称
            api_key: API 密钥（可选）
            api_base: API 基础 URL（可选）
            timeout: 请求超时（秒）
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout

    @property
    def model_name(self) -> str:
        return f"{self.provider}/{self.model}" if self.provider else self.model

    def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """调用 LLM 生成文本"""
        messages = [{"role": "user", "content": prompt}]
        try:
            response = completion(
                model=self.model_name,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                api_key=self.api_key,
                api_base=self.api_base,
                timeout=self.timeout,
            )
        except LiteLLMRateLimitError as e:
            message = str(e)
            if is_quota_exhausted(message):
                raise QuotaExceededError(
                    f"LLM 配额耗尽: {message}",
                    source=self.model_name
                )
            raise RateLimitError(
                f"LLM 请求频率超限: {message}",
                source=self.model_name
            )
        except Exception as e:
            raise DataUnavailableError(
                f"LLM 调用失败: {str(e)}",
                source=self.model_name
            )

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise DataUnavailableError(
                "LLM 返回空内容",
                source=self.model_name
            )
        return content.strip()
