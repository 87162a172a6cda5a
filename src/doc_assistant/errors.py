"""Exception hierarchy shared by every layer of the assistant."""

from __future__ import annotations


class AssistantError(Exception):
    """Base class for all errors raised by :mod:`doc_assistant`."""


class ConfigurationError(AssistantError, ValueError):
    """A tunable is out of range (e.g. ``chunk_overlap >= chunk_size``)."""


class EmbeddingError(AssistantError):
    """The embedding backend failed to produce a vector.

    When raised from ingestion, ``source_id`` and ``position`` identify
    the segment that could not be embedded.
    """

    def __init__(
        self,
        message: str,
        *,
        source_id: str | None = None,
        position: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source_id = source_id
        self.position = position


class DimensionMismatchError(AssistantError, ValueError):
    """A vector's length disagrees with the store's dimensionality."""

    def __init__(self, expected: int | None, actual: int) -> None:
        if expected is None:
            message = f"Embedding must have at least one dimension, got {actual}"
        else:
            message = f"Expected embedding of dimension {expected}, got {actual}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class GenerationError(AssistantError):
    """The language model call failed."""


class DocumentLoadError(AssistantError):
    """A source file could not be read or parsed into text."""
