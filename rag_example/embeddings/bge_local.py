"""Implementation of the EmbeddingInterface using local Sentence Transformers models (e.g., BGE).
"""

import logging
from typing import List

import torch
from sentence_transformers import SentenceTransformer

from rag_example.interfaces.embedding_interface import EmbeddingInterface, EmbeddingVector
from rag_example.core.config import Settings

logger = logging.getLogger(__name__)

class BGELocalEmbeddings(EmbeddingInterface):
    """Embedding client using local Sentence Transformer models (like BAAI/bge-*).

    Implements the EmbeddingInterface protocol.
    Handles loading the model and generating embeddings on the appropriate device.
    """
    def __init__(self, settings: Settings):
        """Loads the model named by ``settings.embedding_model`` on the best available device.

        Args:
            settings: The application settings containing the embedding_model name.
        """
        self.model_name = settings.embedding_model
        self.device = self._get_optimal_device()
        logger.info(f"Initializing Sentence Transformer with model: {self.model_name} on device: {self.device}")

        try:
            self.model = SentenceTransformer(self.model_name, device=self.device)
            logger.info(f"Successfully loaded Sentence Transformer model: {self.model_name}")
        except Exception as e:
            logger.error(f"Failed to load Sentence Transformer model '{self.model_name}': {e}", exc_info=True)
            raise

    def _get_optimal_device(self) -> str:
        """Determines the best available device ('mps', 'cuda' or 'cpu')."""
        if torch.backends.mps.is_available():
            return 'mps'
        elif torch.cuda.is_available():
            return 'cuda'
        return 'cpu'

    def embed_documents(self, texts: List[str]) -> List[EmbeddingVector]:
        """Generates embeddings for a list of documents.

        Args:
            texts: A list of strings (documents) to embed.

        Returns:
            A list of embedding vectors.
        """
        logger.debug(f"Generating embeddings for {len(texts)} documents using {self.model_name}.")
        self._warn_on_truncation(texts)
        embeddings = self.model.encode(texts, convert_to_tensor=False, normalize_embeddings=True)
        return [list(map(float, vector)) for vector in embeddings]

    def _warn_on_truncation(self, texts: List[str]) -> None:
        """Logs a warning for texts longer than the model's max sequence length.

        The model silently truncates them, so only their opening is embedded.
        """
        max_length = getattr(self.model, "max_seq_length", None)
        if not max_length:
            return
        for i, text in enumerate(texts):
            token_count = len(self.model.tokenizer.tokenize(text))
            if token_count > max_length:
                logger.warning(
                    f"Document {i} has {token_count} tokens; {self.model_name} embeds only the first {max_length}."
                )

    def embed_query(self, text: str) -> EmbeddingVector:
        """Generates an embedding for a single query text.

        BGE models recommend an instruction prefix for retrieval queries;
        it is only applied to models whose name contains 'bge'.
        """
        query = text
        if "bge" in self.model_name.lower():
            query = f"Represent this sentence for searching relevant passages: {text}"
        embedding = self.model.encode(query, convert_to_tensor=False, normalize_embeddings=True)
        return list(map(float, embedding))
