"""Implementation of the VectorStoreInterface using ChromaDB.
"""

import hashlib
import logging
from typing import List, Dict, Any, Optional

import chromadb

from rag_example.core.config import Settings
from rag_example.core.errors import RetrievalUnavailable
from rag_example.interfaces.embedding_interface import EmbeddingInterface
from rag_example.interfaces.vector_store_interface import VectorStoreInterface
from rag_example.models import Document

logger = logging.getLogger(__name__)

class ChromaStore(VectorStoreInterface):
    """Connects to a persistent ChromaDB collection for similarity search.

    Query text is embedded with the injected embedding service; the
    collection uses cosine distance so ``score = 1 - distance``.

    Implements the VectorStoreInterface protocol.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_service: EmbeddingInterface,
        client: Optional[Any] = None,
    ):
        """Initializes the ChromaDB client and collection.

        Args:
            settings: The application settings containing ChromaDB configuration.
            embedding_service: Service used to embed queries and added texts.
            client: Optional pre-built chromadb client (e.g. an EphemeralClient).
        """
        self.embedding_service = embedding_service
        self.collection_name = settings.vector_collection_name
        persist_directory = settings.vector_store_path
        try:
            self.client = client or chromadb.PersistentClient(path=persist_directory)
            self.collection = self.client.get_or_create_collection(
                self.collection_name,
                metadata={"hnsw:space": "cosine"},
            )
        except Exception as e:
            logger.error(f"Failed to initialize ChromaDB client at path '{persist_directory}': {e}", exc_info=True)
            raise RetrievalUnavailable(f"ChromaDB unavailable at '{persist_directory}': {e}") from e
        logger.info(
            f"ChromaDB client initialized. Path: '{persist_directory}'. "
            f"Collection: '{self.collection_name}'."
        )

    def count(self) -> int:
        """Returns the number of documents stored in the collection."""
        try:
            return self.collection.count()
        except Exception as e:
            raise RetrievalUnavailable(f"Failed to count Chroma collection '{self.collection_name}': {e}") from e

    def add_texts(
        self,
        texts: List[str],
        metadatas: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[List[str]] = None,
    ) -> List[str]:
        """Embeds ``texts`` and upserts them into the collection.

        Ids default to ``"{source}_{sha1(text)[:16]}"`` where source comes from
        the metadata (``"doc"`` if absent), so adding the same text twice
        replaces it.

        Returns:
            The ids written, in input order.
        """
        if not texts:
            logger.warning("add_texts called with no texts.")
            return []
        if metadatas is not None and len(metadatas) != len(texts):
            raise ValueError(f"Got {len(metadatas)} metadatas for {len(texts)} texts.")
        if ids is not None and len(ids) != len(texts):
            raise ValueError(f"Got {len(ids)} ids for {len(texts)} texts.")

        metadatas = metadatas or [{} for _ in texts]
        if ids is None:
            ids = [
                f"{metadata.get('source', 'doc')}_{hashlib.sha1(text.encode('utf-8')).hexdigest()[:16]}"
                for text, metadata in zip(texts, metadatas)
            ]
        # Chroma rejects empty metadata dicts
        metadatas = [metadata or {"source": doc_id} for metadata, doc_id in zip(metadatas, ids)]

        try:
            embeddings = self.embedding_service.embed_documents(texts)
            self.collection.upsert(
                ids=ids,
                embeddings=embeddings,
                documents=texts,
                metadatas=metadatas,
            )
        except Exception as e:
            logger.error(f"Failed to add documents to Chroma: {e}", exc_info=True)
            raise RetrievalUnavailable(f"Failed to add documents to Chroma: {e}") from e

        logger.info(f"Upserted {len(ids)} documents into collection '{self.collection_name}'.")
        return ids

    def search(self, query: str, top_k: int) -> List[Document]:
        """Queries the Chroma collection for documents similar to ``query``.

        Args:
            query: The query text.
            top_k: The maximum number of documents to return (> 0).

        Returns:
            Documents ordered by descending score, at most ``top_k`` of them.

        Raises:
            ValueError: If ``top_k`` is not positive.
            RetrievalUnavailable: For embedding or ChromaDB errors.
        """
        if top_k <= 0:
            raise ValueError(f"top_k must be > 0, got {top_k}")

        try:
            logger.debug(f"Querying Chroma collection '{self.collection_name}' with top_k={top_k}.")
            query_embedding = self.embedding_service.embed_query(query)
            results = self.collection.query(
                query_embeddings=[query_embedding],
                n_results=top_k,
                include=['metadatas', 'documents', 'distances'],
            )
        except Exception as e:
            logger.error(f"Failed to query Chroma collection: {e}", exc_info=True)
            raise RetrievalUnavailable(f"Failed to query Chroma collection '{self.collection_name}': {e}") from e

        documents = self._to_documents(results)
        documents.sort(key=lambda doc: doc.score if doc.score is not None else float("-inf"), reverse=True)
        documents = documents[:top_k]
        logger.info(f"Retrieved {len(documents)} documents for query: '{query[:50]}...'")
        return documents

    def _to_documents(self, results: Optional[Dict[str, Any]]) -> List[Document]:
        """Flattens the first row of a Chroma query result into Documents."""
        if not results or not results.get('ids') or not results['ids'][0]:
            logger.debug("No results found in Chroma for the query.")
            return []

        result_ids = results['ids'][0]
        result_documents = (results.get('documents') or [[]])[0] or []
        result_metadatas = (results.get('metadatas') or [[]])[0] or []
        result_distances = (results.get('distances') or [[]])[0] or []

        documents: List[Document] = []
        for i, doc_id in enumerate(result_ids):
            distance = result_distances[i] if i < len(result_distances) else None
            documents.append(
                Document(
                    id=str(doc_id),
                    content=(result_documents[i] if i < len(result_documents) else None) or "",
                    metadata=(result_metadatas[i] if i < len(result_metadatas) else None) or {},
                    score=None if distance is None else 1.0 - float(distance),
                )
            )
        return documents
