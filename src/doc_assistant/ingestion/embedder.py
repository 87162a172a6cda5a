"""Embedding capability consumed by ingestion and retrieval."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from doc_assistant.config import settings
from doc_assistant.errors import EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from doc_assistant.retrieval.models import Embedding

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Maps text to a vector of fixed dimensionality.

    Implementations raise :class:`~doc_assistant.errors.EmbeddingError`
    on failure.  Callers never retry; retry policy belongs to whoever
    orchestrates the call.
    """

    @abstractmethod
    def embed(self, text: str) -> Embedding:
        """Return the embedding of *text*."""
        ...


class LangChainEmbedder(Embedder):
    """Adapter over any LangChain :class:`~langchain_core.embeddings.Embeddings`."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    def embed(self, text: str) -> Embedding:
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"Embedding backend failed: {exc}") from exc
        return [float(x) for x in vector]


def get_embedder(model_name: str | None = None) -> LangChainEmbedder:
    """Return the configured sentence-transformer embedder."""
    from langchain_huggingface import HuggingFaceEmbeddings

    model_name = model_name or settings.embedding_model
    logger.info("Loading embedding model %s", model_name)
    return LangChainEmbedder(HuggingFaceEmbeddings(model_name=model_name))
