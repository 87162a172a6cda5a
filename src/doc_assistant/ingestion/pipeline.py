"""Ingestion pipeline: chunk → embed → insert."""

from __future__ import annotations

import logging

from doc_assistant.config import settings
from doc_assistant.errors import EmbeddingError
from doc_assistant.ingestion.chunker import Chunker
from doc_assistant.ingestion.embedder import Embedder
from doc_assistant.retrieval.base import VectorStoreBase
from doc_assistant.retrieval.models import Document, IndexEntry

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Turn a :class:`Document` into indexed segments.

    Ingestion is not transactional.  If embedding fails partway through a
    document, segments inserted before the failure stay in the store.

    Parameters
    ----------
    chunker:
        Splits documents into segments.
    embedder:
        Produces one vector per segment.
    store:
        Destination for the resulting index entries.
    """

    def __init__(self, chunker: Chunker, embedder: Embedder, store: VectorStoreBase) -> None:
        self.chunker = chunker
        self.embedder = embedder
        self.store = store

    @classmethod
    def from_settings(cls, embedder: Embedder, store: VectorStoreBase) -> IngestionPipeline:
        """Build a pipeline whose chunker uses the configured sizes."""
        chunker = Chunker(chunk_size=settings.chunk_size, chunk_overlap=settings.chunk_overlap)
        return cls(chunker, embedder, store)

    def ingest(self, document: Document) -> int:
        """Index every segment of *document* and return how many were inserted.

        Raises
        ------
        EmbeddingError
            Carrying ``source_id`` and ``position`` of the segment that
            could not be embedded, chained from the backend's error.
        DimensionMismatchError
            If the embedder's output disagrees with the store.
        """
        segments = self.chunker.split(document)
        logger.info("Split %s into %d segments", document.source_id, len(segments))

        for segment in segments:
            try:
                embedding = self.embedder.embed(segment.text)
            except EmbeddingError as exc:
                logger.error(
                    "Embedding failed for %s at position %d (%d segments already indexed)",
                    document.source_id,
                    segment.position,
                    segment.position,
                )
                raise EmbeddingError(
                    f"Failed to embed segment {segment.position} of {document.source_id!r}: {exc}",
                    source_id=document.source_id,
                    position=segment.position,
                ) from exc
            self.store.insert(IndexEntry(embedding=embedding, segment=segment))

        logger.info("Indexed %d segments from %s", len(segments), document.source_id)
        return len(segments)
