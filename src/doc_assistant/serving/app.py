"""FastAPI application exposing the assistant as a REST API."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from doc_assistant.config import settings
from doc_assistant.errors import (
    AssistantError,
    DocumentLoadError,
    EmbeddingError,
    GenerationError,
)
from doc_assistant.retrieval.models import Document
from doc_assistant.service import Answer, AssistantService, IngestReport, build_service

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Document Assistant API",
    version="0.1.0",
    description="Ask questions answered from ingested documents.",
)


@lru_cache(maxsize=1)
def get_service() -> AssistantService:
    """Process-wide service; overridden in tests via ``dependency_overrides``."""
    return build_service()


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Raw text to index under *source_id*."""

    source_id: str
    text: str


class LoadRequest(BaseModel):
    """Server-side path of a PDF or text file to index."""

    path: str


class AskRequest(BaseModel):
    question: str


class StatsResponse(BaseModel):
    segments: int


# ── Error mapping ─────────────────────────────────────────────────────
_STATUS_BY_ERROR: dict[type[AssistantError], int] = {
    DocumentLoadError: 400,
    EmbeddingError: 502,
    GenerationError: 502,
}


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    status = next(
        (code for err, code in _STATUS_BY_ERROR.items() if isinstance(exc, err)),
        500,
    )
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
def health(service: AssistantService = Depends(get_service)) -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok" if service.health() else "degraded"}


@app.get("/rag/stats", response_model=StatsResponse)
def stats(service: AssistantService = Depends(get_service)) -> StatsResponse:
    return StatsResponse(segments=service.document_count())


@app.post("/rag/ingest", response_model=IngestReport)
def ingest(request: IngestRequest, service: AssistantService = Depends(get_service)) -> IngestReport:
    """Index raw text."""
    count = service.ingest(Document(source_id=request.source_id, raw_text=request.text))
    return IngestReport(source_id=request.source_id, segments=count)


@app.post("/rag/load", response_model=IngestReport)
def load(request: LoadRequest, service: AssistantService = Depends(get_service)) -> IngestReport:
    """Load a file from the server's filesystem and index it."""
    return service.ingest_file(request.path)


@app.post("/rag/ask", response_model=Answer)
def ask(request: AskRequest, service: AssistantService = Depends(get_service)) -> Answer:
    """Answer a question from the indexed documents."""
    return service.ask(request.question)


@app.post("/rag/clear")
def clear(service: AssistantService = Depends(get_service)) -> dict[str, str]:
    service.clear()
    return {"status": "cleared"}
