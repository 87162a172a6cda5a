"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from doc_assistant.errors import EmbeddingError
from doc_assistant.ingestion.embedder import Embedder
from doc_assistant.retrieval.memory_store import InMemoryVectorStore


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class LookupEmbedder(Embedder):
    """Returns canned vectors by exact text; unknown text gets *default*.

    Set *fail_on* to make ``embed`` raise for matching text.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        *,
        default: list[float] | None = None,
        fail_on: Callable[[str], bool] | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.fail_on = fail_on
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on is not None and self.fail_on(text):
            raise EmbeddingError(f"backend unavailable for {text!r}")
        return list(self.vectors.get(text, self.default))


@pytest.fixture()
def make_embedder() -> Callable[..., LookupEmbedder]:
    return LookupEmbedder


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()
