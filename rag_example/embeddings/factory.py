"""Selects the embedding backend named in the settings.
"""

import logging

from rag_example.core.config import Settings
from rag_example.interfaces.embedding_interface import EmbeddingInterface

logger = logging.getLogger(__name__)

EMBEDDING_PROVIDERS = ("bge_local", "ollama")


def create_embedding_service(settings: Settings) -> EmbeddingInterface:
    """Builds the embedding service for ``settings.embedding_provider``.

    Backends are imported lazily so the ollama provider does not load torch.

    Raises:
        ValueError: If the provider is unknown.
    """
    provider = settings.embedding_provider.lower()
    if provider == "bge_local":
        from rag_example.embeddings.bge_local import BGELocalEmbeddings
        return BGELocalEmbeddings(settings=settings)
    if provider == "ollama":
        from rag_example.embeddings.ollama_embeddings import OllamaEmbeddings
        return OllamaEmbeddings(settings=settings)
    raise ValueError(f"Unknown embedding provider '{settings.embedding_provider}'. Expected one of {EMBEDDING_PROVIDERS}.")
