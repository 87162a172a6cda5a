"""Domain models for segments, index entries and retrieval results."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# A fixed-length vector produced by an :class:`~doc_assistant.ingestion.embedder.Embedder`.
Embedding = list[float]


class Document(BaseModel):
    """Plain text handed to ingestion; not retained after chunking."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    raw_text: str


class Segment(BaseModel):
    """A contiguous slice of a document's text.

    Attributes
    ----------
    id:
        Opaque identifier, unique per created segment.
    text:
        The slice itself.
    source_id:
        Identifier of the document the slice was cut from.
    position:
        Ordinal of the slice within its document, starting at 0.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    source_id: str
    position: int = Field(ge=0)

    def short_ref(self) -> str:
        """Return a compact ``[source§position]`` reference string."""
        return f"[{self.source_id}§{self.position}]"


class IndexEntry(BaseModel):
    """The unit stored in and searched by a vector store."""

    model_config = ConfigDict(frozen=True)

    embedding: Embedding
    segment: Segment


class ScoredSegment(BaseModel):
    """A retrieved segment together with its similarity score."""

    model_config = ConfigDict(frozen=True)

    segment: Segment
    score: float = Field(ge=0.0, le=1.0)

    def __str__(self) -> str:  # noqa: D105
        return f"{self.segment.short_ref()} ({self.score:.3f}) {self.segment.text[:120]}…"


# Ordered best-first, at most ``top_k`` long. Empty means nothing cleared the threshold.
RetrievalResult = list[ScoredSegment]
