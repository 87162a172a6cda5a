"""Abstract base class for vector-store backends.

Adding a new backend (Milvus, Redis, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the four abstract
methods.  The retriever and ingestion pipeline are backend-agnostic.

Backends own their mutual exclusion: ``insert``, ``query`` and ``clear``
may be called from several threads without external coordination, and a
query observes either the state before or after a concurrent write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from doc_assistant.errors import DimensionMismatchError
from doc_assistant.retrieval.models import IndexEntry, RetrievalResult


# Scores are rounded so that identical vectors land on exactly 1.0.
SCORE_DECIMALS = 12


def cosine_to_score(cosine: float) -> float:
    """Map a cosine similarity in ``[-1, 1]`` onto a score in ``[0, 1]``."""
    return min(1.0, max(0.0, round((cosine + 1.0) / 2.0, SCORE_DECIMALS)))


def normalise(vector: Sequence[float]) -> np.ndarray:
    """Return *vector* as float64 scaled to unit length; zero vectors stay zero."""
    arr = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(arr)
    if norm == 0.0:
        return arr
    return arr / norm


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    The store fixes its dimensionality ``D`` from the first inserted
    vector; :meth:`clear` forgets it again.
    """

    def __init__(self) -> None:
        self._dimension: int | None = None

    @property
    def dimension(self) -> int | None:
        """Dimensionality of stored embeddings, ``None`` while empty."""
        return self._dimension

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def insert(self, entry: IndexEntry) -> None:
        """Append *entry*.  No deduplication is performed."""
        ...

    @abstractmethod
    def query(
        self,
        vector: Sequence[float],
        top_k: int,
        min_score: float,
    ) -> RetrievalResult:
        """Return the *top_k* entries most similar to *vector*.

        Scores are ``(cosine + 1) / 2``.  Entries scoring below
        *min_score* are dropped; ties keep insertion order.  Querying an
        empty store returns ``[]``.

        Raises
        ------
        DimensionMismatchError
            If ``len(vector)`` differs from the store's dimensionality.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Discard every entry."""
        ...

    @abstractmethod
    def size(self) -> int:
        """Return the current number of entries."""
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        return True

    # -- helpers for subclasses -----------------------------------------------

    def _check_insert_dimension(self, vector: Sequence[float]) -> None:
        """Validate *vector* and fix ``D`` on the first insert.  Call under the lock."""
        actual = len(vector)
        if actual == 0:
            raise DimensionMismatchError(self._dimension, actual)
        if self._dimension is None:
            self._dimension = actual
        elif actual != self._dimension:
            raise DimensionMismatchError(self._dimension, actual)

    def _check_query_dimension(self, vector: Sequence[float]) -> None:
        actual = len(vector)
        if actual == 0:
            raise DimensionMismatchError(self._dimension, actual)
        if self._dimension is not None and actual != self._dimension:
            raise DimensionMismatchError(self._dimension, actual)
