"""Chunk embedding through a LangChain ``Embeddings`` provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import openai

from rag_ingest.errors import EmbeddingFailure

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from rag_ingest.config import Settings

logger = logging.getLogger(__name__)

# Checked in order; the first matching exception type decides the reason.
_OPENAI_REASONS: tuple[tuple[type[Exception], str], ...] = (
    (openai.AuthenticationError, "authentication"),
    (openai.PermissionDeniedError, "authentication"),
    (openai.RateLimitError, "rate_limit"),
    (openai.BadRequestError, "malformed_input"),
    (openai.UnprocessableEntityError, "malformed_input"),
    (openai.APIConnectionError, "network"),
)


def _classify(exc: Exception) -> str:
    for exc_type, reason in _OPENAI_REASONS:
        if isinstance(exc, exc_type):
            return reason
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return "network"
    return "provider"


def normalize_text(text: str) -> str:
    """Collapse embedded newlines to spaces before sending text to a provider."""
    return text.replace("\r\n", " ").replace("\n", " ")


class Embedder:
    """Turn chunk texts into fixed-dimension vectors.

    Parameters
    ----------
    provider:
        Any LangChain :class:`~langchain_core.embeddings.Embeddings`
        implementation.  Tests inject a deterministic fake.
    dimension:
        Expected length of every vector produced during the run.
    """

    def __init__(self, provider: Embeddings, dimension: int) -> None:
        self._provider = provider
        self.dimension = dimension

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts* in one provider request, preserving order.

        Raises
        ------
        EmbeddingFailure
            When the provider errors, or returns the wrong number of
            vectors or a vector of the wrong dimension.
        """
        if not texts:
            return []

        try:
            vectors = self._provider.embed_documents([normalize_text(t) for t in texts])
        except Exception as exc:
            raise EmbeddingFailure(str(exc), reason=_classify(exc)) from exc

        if len(vectors) != len(texts):
            raise EmbeddingFailure(
                f"provider returned {len(vectors)} vectors for {len(texts)} texts",
                reason="count",
            )
        for i, vector in enumerate(vectors):
            if len(vector) != self.dimension:
                raise EmbeddingFailure(
                    f"vector {i} has dimension {len(vector)}, expected {self.dimension}",
                    reason="dimension",
                )

        logger.debug("Embedded %d texts (dim=%d)", len(vectors), self.dimension)
        return [list(v) for v in vectors]


def get_embedding_provider(settings: Settings) -> Embeddings:
    """Return the configured embedding provider.

    ``openai`` uses the hosted API with client-side retries disabled;
    ``huggingface`` runs a local sentence-transformer (requires the
    ``huggingface`` extra).
    """
    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Using local embedding model: %s", settings.embedding_model)
        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    from langchain_openai import OpenAIEmbeddings

    kwargs: dict = {
        "model": settings.embedding_model,
        "api_key": settings.openai_api_key,
        "max_retries": 0,
    }
    # Only the text-embedding-3 family accepts a requested output size.
    if settings.embedding_model.startswith("text-embedding-3"):
        kwargs["dimensions"] = settings.vector_dimension
    return OpenAIEmbeddings(**kwargs)
