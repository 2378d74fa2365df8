"""Dependencies module for the RAG example.

This module defines the providers used by FastAPI (through ``Depends``)
and by the CLI to build the adapters and the RAG service.
"""

import logging

from fastapi import Depends

from rag_example.core.config import Settings, get_settings
from rag_example.embeddings.factory import create_embedding_service
from rag_example.interfaces.embedding_interface import EmbeddingInterface
from rag_example.interfaces.llm_interface import LLMInterface
from rag_example.interfaces.vector_store_interface import VectorStoreInterface
from rag_example.llms.ollama_client import OllamaClient
from rag_example.prompts.template import PromptTemplate
from rag_example.query.rag_service import RAGService, StreamService
from rag_example.vector_stores.chroma_store import ChromaStore

logger = logging.getLogger(__name__)

# --- Singleton instances for services (cached per application lifecycle) ---
_embedding_service: EmbeddingInterface | None = None
_vector_store: VectorStoreInterface | None = None
_llm_service: LLMInterface | None = None
_prompt_template: PromptTemplate | None = None
_rag_service: RAGService | None = None
# ---------------------------------------------------------------------------


def get_prompt_template(settings: Settings = Depends(get_settings)) -> PromptTemplate:
    """Provides the singleton PromptTemplate, loaded once.

    Raises:
        PromptTemplateMissing: If the template file cannot be read.
    """
    global _prompt_template
    if _prompt_template is None:
        _prompt_template = PromptTemplate.load(settings)
    return _prompt_template


def get_embedding_service(settings: Settings = Depends(get_settings)) -> EmbeddingInterface:
    """Provides the singleton EmbeddingInterface instance."""
    global _embedding_service
    if _embedding_service is None:
        logger.info(f"Creating embedding service singleton (provider: {settings.embedding_provider})")
        _embedding_service = create_embedding_service(settings)
    return _embedding_service


def get_vector_store(
    settings: Settings = Depends(get_settings),
    embedding_service: EmbeddingInterface = Depends(get_embedding_service),
) -> VectorStoreInterface:
    """Provides the singleton VectorStoreInterface instance."""
    global _vector_store
    if _vector_store is None:
        logger.info("Creating ChromaStore singleton instance...")
        _vector_store = ChromaStore(settings=settings, embedding_service=embedding_service)
    return _vector_store


def get_llm_service(settings: Settings = Depends(get_settings)) -> LLMInterface:
    """Provides the singleton LLMInterface instance."""
    global _llm_service
    if _llm_service is None:
        logger.info(f"Creating OllamaClient singleton instance for host: {settings.ollama_base_url}")
        _llm_service = OllamaClient(settings=settings)
    return _llm_service


def get_rag_service(
    settings: Settings = Depends(get_settings),
    vector_store: VectorStoreInterface = Depends(get_vector_store),
    llm: LLMInterface = Depends(get_llm_service),
    prompt_template: PromptTemplate = Depends(get_prompt_template),
) -> RAGService:
    """Provides the singleton RAGService instance."""
    global _rag_service
    if _rag_service is None:
        logger.info("Creating RAGService singleton instance.")
        _rag_service = RAGService(
            vector_store=vector_store,
            llm=llm,
            prompt_template=prompt_template,
            top_k=settings.retrieval_top_k,
            stream_prompt=settings.stream_prompt,
        )
    return _rag_service


def get_stream_service(
    settings: Settings = Depends(get_settings),
    llm: LLMInterface = Depends(get_llm_service),
) -> StreamService:
    """Provides the streaming demo service. Depends on the chat model only."""
    return StreamService(llm=llm, stream_prompt=settings.stream_prompt)


def build_rag_service(settings: Settings | None = None) -> RAGService:
    """Wires every adapter into a RAGService outside of a request (CLI use)."""
    settings = settings or get_settings()
    prompt_template = get_prompt_template(settings)
    embedding_service = get_embedding_service(settings)
    vector_store = get_vector_store(settings, embedding_service)
    llm = get_llm_service(settings)
    return get_rag_service(settings, vector_store, llm, prompt_template)


def reset_singletons():
    """Resets all service singletons so the next call rebuilds them."""
    global _embedding_service, _vector_store, _llm_service, _prompt_template, _rag_service
    _embedding_service = None
    _vector_store = None
    _llm_service = None
    _prompt_template = None
    _rag_service = None
    logger.info("Service singletons reset.")
