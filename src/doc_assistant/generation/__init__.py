"""
Generation — prompt assembly and the language-model boundary.

Public API
----------
- :class:`ContextAssembler` — build the grounded prompt (or the sentinel).
- :class:`Generator` — ``generate(prompt) -> str`` contract.
- :class:`ChatModelGenerator` — generator over a LangChain chat model.
"""

from doc_assistant.generation.llm import ChatModelGenerator, Generator
from doc_assistant.generation.prompts import NO_RELEVANT_DOCUMENTS, ContextAssembler, is_sentinel

__all__ = [
    "NO_RELEVANT_DOCUMENTS",
    "ChatModelGenerator",
    "ContextAssembler",
    "Generator",
    "is_sentinel",
]
