"""Implementation of the EmbeddingInterface using the Ollama /api/embed endpoint.
"""

import logging
from typing import List, Optional

import ollama

from rag_example.interfaces.embedding_interface import EmbeddingInterface, EmbeddingVector
from rag_example.core.config import Settings

logger = logging.getLogger(__name__)


class OllamaEmbeddings(EmbeddingInterface):
    """Embeds text with an embedding model served by Ollama."""

    def __init__(self, settings: Settings, client: Optional[ollama.Client] = None):
        self.client = client or ollama.Client(host=settings.ollama_base_url)
        self.model_name = settings.ollama_embedding_model
        logger.info(f"Ollama embeddings initialized with model: {self.model_name}")

    def embed_documents(self, texts: List[str]) -> List[EmbeddingVector]:
        if not texts:
            return []
        logger.debug(f"Embedding {len(texts)} documents with Ollama model {self.model_name}.")
        response = self.client.embed(model=self.model_name, input=texts)
        return [list(vector) for vector in response['embeddings']]

    def embed_query(self, text: str) -> EmbeddingVector:
        return self.embed_documents([text])[0]
