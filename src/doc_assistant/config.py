"""Shared configuration loaded from environment / ``.env``."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    Only the factories (``from_settings``, :func:`build_service`, …) read
    these; the core classes take their tunables as constructor arguments.
    """

    # Chunking
    chunk_size: int = Field(default=500, description="Characters per segment")
    chunk_overlap: int = Field(default=50, description="Characters shared by consecutive segments")

    # Retrieval
    top_k: int = Field(default=3, description="Maximum number of segments returned per question")
    min_score: float = Field(
        default=0.7,
        description="Similarity floor in [0, 1]; segments scoring below it are dropped",
    )

    # Embedding
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # LLM (any OpenAI-compatible endpoint)
    llm_api_key: str = Field(default="", description="API key for the chat completion endpoint")
    llm_base_url: str = Field(
        default="https://api.deepseek.com",
        description="Base URL of the OpenAI-compatible chat completion API",
    )
    llm_model_name: str = "deepseek-chat"
    llm_temperature: float = 0.7
    llm_timeout: float = Field(default=60.0, description="Request timeout in seconds")

    # Vector store
    vector_store_backend: Literal["memory", "chroma"] = "memory"
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "doc_assistant"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
