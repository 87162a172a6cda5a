"""
Retrieval — vector search with a similarity floor.

This module wraps the vector store behind a clean interface so that
ingestion and question answering never need to know which backend is
holding the vectors.

Public surface
--------------
- :class:`Retriever` — embed a question and return its nearest segments.
- :class:`VectorStoreBase` — abstract backend.
- :class:`InMemoryVectorStore` — default exact-scan backend.
- :class:`ChromaVectorStore` — Chroma backend (lazy import).
- :class:`Segment`, :class:`IndexEntry`, :class:`ScoredSegment`,
  :class:`Document` — data models.
"""

from doc_assistant.retrieval.base import VectorStoreBase
from doc_assistant.retrieval.memory_store import InMemoryVectorStore
from doc_assistant.retrieval.models import (
    Document,
    Embedding,
    IndexEntry,
    RetrievalResult,
    ScoredSegment,
    Segment,
)
from doc_assistant.retrieval.retriever import Retriever

__all__ = [
    "ChromaVectorStore",
    "Document",
    "Embedding",
    "InMemoryVectorStore",
    "IndexEntry",
    "RetrievalResult",
    "Retriever",
    "ScoredSegment",
    "Segment",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from doc_assistant.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
