"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

import chromadb
import numpy as np

from doc_assistant.config import settings
from doc_assistant.retrieval.base import VectorStoreBase, cosine_to_score, normalise
from doc_assistant.retrieval.models import IndexEntry, RetrievalResult, ScoredSegment, Segment

logger = logging.getLogger(__name__)

_COLLECTION_METADATA = {"hnsw:space": "cosine"}


def _rescore(stored: Sequence[float], query: np.ndarray) -> float:
    """Exact float64 score of a stored vector against a normalised *query*.

    Chroma keeps vectors and distances in float32, which leaves an
    identical vector a few ulps short of 1.0.
    """
    return cosine_to_score(float(normalise(stored) @ query))


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    The collection lives in cosine space, so search is approximate
    (HNSW) and results are best-effort top-k.  Insertion order is kept in
    a ``seq`` metadata field to break score ties.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    client:
        Pre-built Chroma client.  When *None*, an ``HttpClient`` is created
        for *host* / *port*.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        client: Any | None = None,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
    ) -> None:
        super().__init__()
        self.collection_name = collection_name
        self._lock = threading.RLock()
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            collection_name, metadata=_COLLECTION_METADATA
        )
        self._seq = self._collection.count()
        if self._seq:
            existing = self._collection.get(limit=1, include=["embeddings"])
            self._dimension = len(existing["embeddings"][0])
            logger.info(
                "Attached to Chroma collection %r (%d entries, dim=%d)",
                collection_name,
                self._seq,
                self._dimension,
            )

    # -- VectorStoreBase overrides --------------------------------------------

    def insert(self, entry: IndexEntry) -> None:
        segment = entry.segment
        with self._lock:
            self._check_insert_dimension(entry.embedding)
            self._collection.add(
                ids=[segment.id],
                embeddings=[list(entry.embedding)],
                documents=[segment.text],
                metadatas=[
                    {
                        "source_id": segment.source_id,
                        "position": segment.position,
                        "seq": self._seq,
                    }
                ],
            )
            self._seq += 1

    def query(
        self,
        vector: Sequence[float],
        top_k: int,
        min_score: float,
    ) -> RetrievalResult:
        with self._lock:
            count = self._collection.count()
            if count == 0 or top_k <= 0:
                return []
            self._check_query_dimension(vector)
            raw = self._collection.query(
                query_embeddings=[list(vector)],
                n_results=min(top_k, count),
                include=["documents", "metadatas", "embeddings"],
            )

        ids = raw.get("ids", [[]])[0]
        docs = raw.get("documents", [[]])[0]
        metas = raw.get("metadatas", [[]])[0]
        embeddings = raw.get("embeddings", [[]])[0]

        unit_query = normalise(vector)
        hits: list[tuple[float, int, Segment]] = []
        for seg_id, text, meta, stored in zip(ids, docs, metas, embeddings):
            score = _rescore(stored, unit_query)
            if score < min_score:
                continue
            meta = meta or {}
            segment = Segment(
                id=seg_id,
                text=text or "",
                source_id=str(meta.get("source_id", "unknown")),
                position=int(meta.get("position", 0)),
            )
            hits.append((score, int(meta.get("seq", 0)), segment))

        hits.sort(key=lambda hit: (-hit[0], hit[1]))
        return [ScoredSegment(segment=segment, score=score) for score, _, segment in hits[:top_k]]

    def clear(self) -> None:
        with self._lock:
            self._client.delete_collection(self.collection_name)
            self._collection = self._client.get_or_create_collection(
                self.collection_name, metadata=_COLLECTION_METADATA
            )
            self._seq = 0
            self._dimension = None
        logger.info("Recreated Chroma collection %r", self.collection_name)

    def size(self) -> int:
        with self._lock:
            return self._collection.count()

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
