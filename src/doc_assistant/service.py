"""Assistant service — wires ingestion, retrieval and generation together.

Usage::

    from doc_assistant.service import build_service

    service = build_service()
    service.ingest_file("handbook.pdf")
    answer = service.ask("What is the refund policy?")
    print(answer.answer, answer.sources)
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from doc_assistant.config import settings
from doc_assistant.generation.llm import Generator
from doc_assistant.generation.prompts import NO_RELEVANT_DOCUMENTS, ContextAssembler
from doc_assistant.ingestion.loader import load_document
from doc_assistant.ingestion.pipeline import IngestionPipeline
from doc_assistant.retrieval.base import VectorStoreBase
from doc_assistant.retrieval.models import Document
from doc_assistant.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)


class Answer(BaseModel):
    """Answer to a question plus the segments it was grounded on.

    ``grounded`` is ``False`` when nothing was retrieved; ``answer`` then
    holds the no-relevant-documents sentinel and the generator was not
    called.
    """

    answer: str
    sources: list[str] = []
    grounded: bool = True


class IngestReport(BaseModel):
    """Outcome of indexing one document under the ``source_id`` actually stored."""

    source_id: str
    segments: int


class AssistantService:
    """Question answering over ingested documents."""

    def __init__(
        self,
        pipeline: IngestionPipeline,
        retriever: Retriever,
        generator: Generator,
        assembler: ContextAssembler | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.retriever = retriever
        self.generator = generator
        self.assembler = assembler or ContextAssembler()

    @property
    def store(self) -> VectorStoreBase:
        return self.pipeline.store

    # -- write path -----------------------------------------------------------

    def ingest(self, document: Document) -> int:
        """Index *document*; return the number of segments added."""
        return self.pipeline.ingest(document)

    def ingest_file(self, path: str | Path) -> IngestReport:
        """Load a PDF or text file and index it."""
        document = load_document(path)
        return IngestReport(source_id=document.source_id, segments=self.ingest(document))

    def clear(self) -> None:
        """Drop every indexed segment."""
        self.store.clear()

    # -- read path ------------------------------------------------------------

    def ask(self, question: str) -> Answer:
        """Answer *question* from the indexed documents."""
        logger.info("Question: %s", question)
        results = self.retriever.retrieve(question)
        if not results:
            logger.info("No segment cleared the threshold; skipping generation")
            return Answer(answer=NO_RELEVANT_DOCUMENTS, grounded=False)

        prompt = self.assembler.assemble(question, results)
        answer = self.generator.generate(prompt)
        return Answer(answer=answer, sources=[hit.segment.short_ref() for hit in results])

    # -- introspection --------------------------------------------------------

    def document_count(self) -> int:
        """Number of indexed segments."""
        return self.store.size()

    def health(self) -> bool:
        return self.store.health_check()


def build_store() -> VectorStoreBase:
    """Create the vector store selected by ``settings.vector_store_backend``."""
    if settings.vector_store_backend == "chroma":
        from doc_assistant.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore()

    from doc_assistant.retrieval.memory_store import InMemoryVectorStore

    return InMemoryVectorStore()


def build_service() -> AssistantService:
    """Wire a service from the global settings.

    Loads the embedding model and connects the chat model, so call it
    once per process.
    """
    from doc_assistant.generation.llm import get_generator
    from doc_assistant.ingestion.embedder import get_embedder

    embedder = get_embedder()
    store = build_store()
    return AssistantService(
        pipeline=IngestionPipeline.from_settings(embedder, store),
        retriever=Retriever.from_settings(embedder, store),
        generator=get_generator(),
    )
