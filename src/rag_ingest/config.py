"""Run configuration loaded from environment variables / ``.env``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rag_ingest.errors import ConfigError


class Settings(BaseSettings):
    """Immutable settings for one ingestion run, populated from env vars or .env file."""

    # Credentials
    openai_api_key: str = Field(default="", description="OpenAI API key used for embeddings")
    pinecone_api_key: str = Field(default="", description="Pinecone API key")

    # Source documents
    data_dir: Path = Field(default=Path("data"), description="Directory holding source documents")
    file_extensions: list[str] = Field(default_factory=lambda: [".md", ".txt"])
    recursive_scan: bool = False

    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=0, ge=0)

    # Embedding
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-3-small"
    vector_dimension: int = Field(default=1536, gt=0)

    # Vector index
    vector_backend: Literal["pinecone", "chroma"] = "pinecone"
    pinecone_index: str = Field(..., min_length=1, description="Name of the target index")
    index_metric: Literal["cosine", "euclidean", "dotproduct"] = "cosine"
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"
    chroma_host: str = "localhost"
    chroma_port: int = 8000

    # Delivery
    batch_size: int = Field(default=100, gt=0)
    provisioning_timeout: float = Field(default=80.0, ge=0, description="Seconds to wait after creating an index")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_consistency(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be < chunk_size ({self.chunk_size})"
            )
        if self.embedding_provider == "openai" and not self.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required for the openai embedding provider")
        if self.vector_backend == "pinecone" and not self.pinecone_api_key:
            raise ValueError("PINECONE_API_KEY is required for the pinecone backend")
        return self


def load_settings(**overrides: Any) -> Settings:
    """Build the run's :class:`Settings`, raising :class:`ConfigError` on any problem.

    Keyword *overrides* take precedence over the environment (pass
    ``_env_file=None`` to ignore a local ``.env``).
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration:\n{exc}") from exc

    if not settings.data_dir.is_dir():
        raise ConfigError(f"Data directory not found: {settings.data_dir}")
    return settings
