"""
Anthropic Client - Claude models via the anthropic SDK.
"""
import time
from typing import Optional, List

import anthropic
import httpx
from loguru import logger

from .base import LLMClient, LLMResponse, Message


class AnthropicClient(LLMClient):
    """Claude client using the Messages API."""
    
    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 120.0,
        verify_ssl: bool = True,
    ):
        super().__init__(api_key, model)
        http_client = None
        if not verify_ssl:
            http_client = httpx.Client(verify=False)
            logger.warning("SSL verification disabled for Anthropic client")
        
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, http_client=http_client)
    
    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Generate response from conversation."""
        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if system:
            kwargs["system"] = system
        
        logger.debug(f"Claude request: model={self.model}, messages={len(messages)}")
        
        started = time.monotonic()
        try:
            message = self._client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise
        
        text = "".join(block.text for block in message.content if block.type == "text")
        
        result = LLMResponse(
            content=text,
            model=message.model,
            usage={
                "input_tokens": message.usage.input_tokens,
                "output_tokens": message.usage.output_tokens,
            },
            stop_reason=message.stop_reason,
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        self.log_call(result)
        return result
