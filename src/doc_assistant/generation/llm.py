"""LLM initialisation — single place to swap providers.

Any OpenAI-compatible chat completion endpoint works: DeepSeek by
default, OpenAI cloud when ``LLM_BASE_URL`` is cleared, or a local vLLM
server.  The rest of the code only sees :class:`Generator`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

from doc_assistant.config import settings
from doc_assistant.errors import GenerationError

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

logger = logging.getLogger(__name__)


class Generator(ABC):
    """Turns a prompt into complete answer text with one blocking call."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        ...


class ChatModelGenerator(Generator):
    """:class:`Generator` backed by a LangChain chat model."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def generate(self, prompt: str) -> str:
        try:
            message = self._llm.invoke(prompt)
        except Exception as exc:
            raise GenerationError(f"Language model call failed: {exc}") from exc
        content = message.content
        if isinstance(content, list):
            # Multi-part responses: keep the text parts only.
            content = "".join(
                part if isinstance(part, str) else part.get("text", "") for part in content
            )
        return content


def get_llm(temperature: float | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    An empty ``settings.llm_base_url`` targets the OpenAI cloud API.
    Local servers that need no key get a dummy ``"EMPTY"`` one, since
    LangChain requires a non-empty value.
    """
    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature if temperature is None else temperature,
        "timeout": settings.llm_timeout,
        "api_key": settings.llm_api_key or "EMPTY",
    }
    if settings.llm_base_url:
        logger.info("Using chat completion endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url

    return ChatOpenAI(**kwargs)


def get_generator() -> ChatModelGenerator:
    """Return a :class:`Generator` over the configured chat model."""
    return ChatModelGenerator(get_llm())
