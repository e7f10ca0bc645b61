"""
OpenAI chat completions, and any endpoint speaking the same API.

The "glm" provider is this client pointed at Z.AI's OpenAI-compatible
endpoint (https://docs.z.ai/guides/develop/openai/python).
"""
import time
from typing import List, Optional

import httpx
from loguru import logger
from openai import OpenAI

from .base import LLMClient, LLMResponse, Message


class OpenAIClient(LLMClient):
    """Chat client on the OpenAI SDK. `base_url` selects a compatible provider."""

    GLM_API_BASE = "https://api.z.ai/api/coding/paas/v4"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        verify_ssl: bool = True,
    ):
        super().__init__(api_key, model)
        self.base_url = base_url or None

        # The SDK only exposes SSL verification through its HTTP client
        http_client = httpx.Client(verify=False) if not verify_ssl else None
        if http_client is not None:
            logger.warning(f"SSL verification disabled for {self.base_url or 'api.openai.com'}")

        self._client = OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=timeout,
            http_client=http_client,
        )

    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> LLMResponse:
        payload = [{"role": "system", "content": system}] if system else []
        payload += [{"role": m.role, "content": m.content} for m in messages]

        started = time.monotonic()
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            logger.error(f"{self.model} request failed: {e}")
            raise

        choice = completion.choices[0]
        usage = completion.usage
        response = LLMResponse(
            content=choice.message.content or "",
            model=completion.model,
            usage={
                "input_tokens": getattr(usage, "prompt_tokens", 0) or 0,
                "output_tokens": getattr(usage, "completion_tokens", 0) or 0,
            },
            stop_reason=choice.finish_reason,
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        self.log_call(response)
        return response
