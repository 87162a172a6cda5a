"""In-process vector store doing an exact cosine scan with numpy."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

import numpy as np

from doc_assistant.retrieval.base import SCORE_DECIMALS, VectorStoreBase, normalise
from doc_assistant.retrieval.models import IndexEntry, RetrievalResult, ScoredSegment

logger = logging.getLogger(__name__)

_INITIAL_CAPACITY = 64


class InMemoryVectorStore(VectorStoreBase):
    """Exact nearest-neighbour store held entirely in process memory.

    Each query is a linear scan, O(n·D).  Rows are normalised on insert
    into one matrix that doubles its capacity when full, so a query is a
    single matrix-vector product over ``matrix[:n]``.  Nothing survives
    the process.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.RLock()
        self._entries: list[IndexEntry] = []
        self._matrix: np.ndarray | None = None

    # -- VectorStoreBase overrides --------------------------------------------

    def insert(self, entry: IndexEntry) -> None:
        row = normalise(entry.embedding)
        with self._lock:
            self._check_insert_dimension(entry.embedding)
            n = len(self._entries)
            if self._matrix is None:
                self._matrix = np.empty((_INITIAL_CAPACITY, row.shape[0]), dtype=np.float64)
            elif n == self._matrix.shape[0]:
                grown = np.empty((2 * n, self._matrix.shape[1]), dtype=np.float64)
                grown[:n] = self._matrix
                self._matrix = grown
            # Rows below n are never rewritten, so views handed to queries stay valid.
            self._matrix[n] = row
            self._entries.append(entry)

    def query(
        self,
        vector: Sequence[float],
        top_k: int,
        min_score: float,
    ) -> RetrievalResult:
        with self._lock:
            n = len(self._entries)
            if n == 0 or top_k <= 0:
                return []
            self._check_query_dimension(vector)
            matrix = self._matrix[:n]
            entries = self._entries

        cosines = matrix @ normalise(vector)
        scores = np.round(np.clip((cosines + 1.0) / 2.0, 0.0, 1.0), SCORE_DECIMALS)

        # Stable sort keeps insertion order among equal scores.
        order = np.argsort(-scores, kind="stable")
        results: RetrievalResult = []
        for idx in order:
            score = float(scores[idx])
            if score < min_score:
                break
            results.append(ScoredSegment(segment=entries[idx].segment, score=score))
            if len(results) == top_k:
                break

        logger.debug("Scanned %d entries, %d above %.3f", n, len(results), min_score)
        return results

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries = []
            self._matrix = None
            self._dimension = None
        logger.info("Cleared in-memory vector store (%d entries dropped)", dropped)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)
