"""
Provider-neutral LLM types and the client interface.

Clients are synchronous. The scoring pipeline calls them from worker threads
via asyncio.to_thread, which copies the caller's context, so the values set
with set_llm_context() are visible when a call is logged.
"""
import json
from abc import ABC, abstractmethod
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger


_call_context: ContextVar[Dict[str, Optional[str]]] = ContextVar(
    "llm_call_context", default={"task_type": None, "run_id": None}
)


def set_llm_context(task_type: Optional[str] = None, run_id: Optional[str] = None):
    """Tag subsequent LLM calls in this context (e.g. task_type="criterion_scoring")."""
    current = dict(_call_context.get())
    if task_type is not None:
        current["task_type"] = task_type
    if run_id is not None:
        current["run_id"] = run_id
    _call_context.set(current)


def get_llm_context() -> Dict[str, Optional[str]]:
    return dict(_call_context.get())


@dataclass
class LLMResponse:
    content: str
    model: str
    usage: Dict[str, int]  # input_tokens, output_tokens
    stop_reason: Optional[str] = None
    latency_ms: Optional[int] = None

    @property
    def total_tokens(self) -> int:
        return sum(self.usage.get(k, 0) for k in ("input_tokens", "output_tokens"))


@dataclass
class Message:
    role: str  # "user" or "assistant"
    content: str


class LLMClient(ABC):
    """
    Chat model behind one provider SDK.

    Subclasses implement chat(); generate() is the single-prompt shortcut the
    scorer and generator use.
    """

    def __init__(self, api_key: str, model: str, enable_logging: bool = True):
        self.api_key = api_key
        self.model = model
        self.enable_logging = enable_logging

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """
        Send a conversation and return the model's reply.

        Args:
            messages: Conversation so far, oldest first
            system: System prompt
            max_tokens: Reply token cap
            temperature: Sampling temperature

        Raises:
            Whatever the provider SDK raises; callers wrap it in their own error.
        """

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Reply to a single user prompt."""
        return self.chat(
            [Message(role="user", content=prompt)],
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    def log_call(self, response: LLMResponse) -> None:
        """Debug-log a finished call with the task and run it belongs to."""
        if not self.enable_logging:
            return

        context = get_llm_context()
        try:
            json.loads(response.content)
            is_json = True
        except (TypeError, ValueError):
            is_json = False

        logger.debug(
            f"LLM call [{context['task_type'] or 'untagged'} / {context['run_id'] or '-'}] "
            f"{response.model}: {response.total_tokens} tokens, {response.latency_ms} ms, "
            f"json={is_json}, stop={response.stop_reason}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"
