"""Fixed-window text chunking with overlap."""

from __future__ import annotations

from doc_assistant.errors import ConfigurationError
from doc_assistant.retrieval.models import Document, Segment


class Chunker:
    """Split documents into overlapping character windows.

    Parameters
    ----------
    chunk_size:
        Maximum number of characters per segment.
    chunk_overlap:
        Number of characters shared by consecutive segments.

    Raises
    ------
    ConfigurationError
        Unless ``chunk_size >= 1`` and ``0 <= chunk_overlap < chunk_size``.
    """

    def __init__(self, chunk_size: int = 500, chunk_overlap: int = 50) -> None:
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size ({chunk_size}) must be >= 1")
        if not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be >= 0 and < chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def stride(self) -> int:
        """Distance between the starts of consecutive windows."""
        return self.chunk_size - self.chunk_overlap

    def split(self, document: Document) -> list[Segment]:
        """Cut *document* into segments in source order.

        The last segment may be shorter than ``chunk_size``.  Empty text
        yields no segments.
        """
        text = document.raw_text
        segments: list[Segment] = []
        start = 0
        while start < len(text):
            end = start + self.chunk_size
            segments.append(
                Segment(text=text[start:end], source_id=document.source_id, position=len(segments))
            )
            if end >= len(text):
                break
            start += self.stride
        return segments
