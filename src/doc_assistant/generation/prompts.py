"""Prompt assembly for the generator.

The template here is the only coupling point to the language model: it
produces plain text and knows nothing about model-specific formats.
"""

from __future__ import annotations

from doc_assistant.retrieval.models import RetrievalResult

# Returned instead of a prompt when retrieval finds nothing; callers may
# show it to the user directly without calling the generator.
NO_RELEVANT_DOCUMENTS = (
    "Sorry, the available documents do not contain information to answer this question."
)

PREAMBLE = "Answer the question using only the following document excerpts:"

INSUFFICIENT_CONTEXT_INSTRUCTION = (
    "Answer based only on the excerpts above. If they do not contain the "
    "information needed, say so explicitly."
)


class ContextAssembler:
    """Formats retrieved segments and a question into one prompt."""

    def assemble(self, question: str, results: RetrievalResult) -> str:
        """Build the generator prompt, or the sentinel when *results* is empty.

        Layout::

            <preamble>

            [Excerpt 1]
            <text>

            [Excerpt 2]
            <text>

            Question: <question>

            <insufficient-context instruction>
        """
        if not results:
            return NO_RELEVANT_DOCUMENTS

        parts = [PREAMBLE, ""]
        for i, hit in enumerate(results, 1):
            parts.append(f"[Excerpt {i}]")
            parts.append(hit.segment.text)
            parts.append("")
        parts.append(f"Question: {question}")
        parts.append("")
        parts.append(INSUFFICIENT_CONTEXT_INSTRUCTION)
        return "\n".join(parts)


def is_sentinel(text: str) -> bool:
    """Return ``True`` if *text* is the no-relevant-documents response."""
    return text == NO_RELEVANT_DOCUMENTS
