"""Retriever — embed a question and look up its nearest segments.

Usage::

    from doc_assistant.retrieval.retriever import Retriever

    retriever = Retriever(embedder, store, top_k=3, min_score=0.7)
    for hit in retriever.retrieve("How is the index cleared?"):
        print(hit.segment.short_ref(), hit.score)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from doc_assistant.config import settings
from doc_assistant.errors import ConfigurationError
from doc_assistant.ingestion.embedder import Embedder
from doc_assistant.retrieval.base import VectorStoreBase
from doc_assistant.retrieval.models import RetrievalResult

logger = logging.getLogger(__name__)


class Retriever:
    """Similarity search over a :class:`VectorStoreBase`.

    Parameters
    ----------
    embedder:
        Embeds questions; must match the embedder used at ingestion.
    store:
        The vector store to search.
    top_k:
        Default maximum number of results.
    min_score:
        Default similarity floor in ``[0, 1]``.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        top_k: int = 3,
        min_score: float = 0.7,
    ) -> None:
        if top_k < 1:
            raise ConfigurationError(f"top_k ({top_k}) must be >= 1")
        if not 0.0 <= min_score <= 1.0:
            raise ConfigurationError(f"min_score ({min_score}) must be within [0, 1]")
        self._embedder = embedder
        self._store = store
        self.top_k = top_k
        self.min_score = min_score

    @classmethod
    def from_settings(cls, embedder: Embedder, store: VectorStoreBase) -> Retriever:
        return cls(embedder, store, top_k=settings.top_k, min_score=settings.min_score)

    # -- public API -----------------------------------------------------------

    def retrieve(
        self,
        question: str,
        *,
        top_k: int | None = None,
        min_score: float | None = None,
    ) -> RetrievalResult:
        """Return the segments most similar to *question*, best first.

        An empty list means nothing cleared the threshold; that is a
        normal outcome, not an error.  :class:`EmbeddingError` from the
        embedder propagates unchanged.
        """
        embedding = self._embedder.embed(question)
        return self.retrieve_by_embedding(embedding, top_k=top_k, min_score=min_score)

    def retrieve_by_embedding(
        self,
        embedding: Sequence[float],
        *,
        top_k: int | None = None,
        min_score: float | None = None,
    ) -> RetrievalResult:
        """Same as :meth:`retrieve` but accepts a pre-computed embedding."""
        top_k = self.top_k if top_k is None else top_k
        min_score = self.min_score if min_score is None else min_score
        results = self._store.query(embedding, top_k, min_score)
        logger.info("Retrieved %d segments (top_k=%d, min_score=%.2f)", len(results), top_k, min_score)
        return results

    # -- LangChain compat -----------------------------------------------------

    def as_langchain_retriever(self, top_k: int | None = None) -> Any:
        """Return a thin LangChain-compatible retriever wrapper.

        LangChain is imported only here so that the rest of the
        retrieval package has no LangChain dependency.
        """
        from langchain_core.documents import Document
        from langchain_core.retrievers import BaseRetriever

        outer = self

        class _LCRetriever(BaseRetriever):
            """Adapter that satisfies LangChain's retriever protocol."""

            def _get_relevant_documents(self_inner, query: str, **kwargs: Any) -> list[Document]:  # type: ignore[override]  # noqa: N805
                return [
                    Document(
                        page_content=hit.segment.text,
                        metadata={
                            "segment_id": hit.segment.id,
                            "source": hit.segment.source_id,
                            "position": hit.segment.position,
                            "score": hit.score,
                        },
                    )
                    for hit in outer.retrieve(query, top_k=top_k)
                ]

        return _LCRetriever()
