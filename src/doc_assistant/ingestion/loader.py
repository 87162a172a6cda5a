"""Document loaders — thin wrappers around LangChain document loaders.

Each loader flattens a file into a single :class:`Document` whose
``source_id`` is the file path.
"""

from __future__ import annotations

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader

from doc_assistant.errors import DocumentLoadError
from doc_assistant.retrieval.models import Document

logger = logging.getLogger(__name__)


def load_pdf(path: str | Path) -> Document:
    """Load a PDF, joining its pages with newlines."""
    pages = PyPDFLoader(str(path)).load()
    return Document(source_id=str(path), raw_text="\n".join(page.page_content for page in pages))


def load_text(path: str | Path, encoding: str = "utf-8") -> Document:
    """Load a plain-text or Markdown file."""
    docs = TextLoader(str(path), encoding=encoding).load()
    return Document(source_id=str(path), raw_text="".join(doc.page_content for doc in docs))


def load_document(path: str | Path) -> Document:
    """Load *path* with the loader matching its suffix.

    Raises
    ------
    DocumentLoadError
        If the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentLoadError(f"No such file: {path}")

    logger.info("Loading document %s", path)
    try:
        if path.suffix.lower() == ".pdf":
            return load_pdf(path)
        return load_text(path)
    except Exception as exc:
        raise DocumentLoadError(f"Failed to load {path}: {exc}") from exc
