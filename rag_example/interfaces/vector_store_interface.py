"""Interface definition for Vector Store services.
"""

from typing import Protocol, List, Dict, Any, Optional, runtime_checkable

from rag_example.models import Document

@runtime_checkable
class VectorStoreInterface(Protocol):
    """A protocol defining the standard interface for vector store interactions.

    This ensures that different vector databases can be used interchangeably.
    """

    def search(self, query: str, top_k: int) -> List[Document]:
        """Returns the documents most similar to ``query``.

        Args:
            query: The query text.
            top_k: Maximum number of documents to return. Must be > 0.

        Returns:
            At most ``top_k`` documents ordered by descending similarity score.
            May be empty.

        Raises:
            ValueError: If ``top_k`` is not positive.
            RetrievalUnavailable: If the underlying store cannot be queried.
        """
        ...

    def add_texts(
        self,
        texts: List[str],
        metadatas: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[List[str]] = None,
    ) -> List[str]:
        """Adds (or replaces) texts in the store and returns their ids.

        Raises:
            ValueError: If metadatas or ids do not match the number of texts.
            RetrievalUnavailable: If the underlying store cannot be written.
        """
        ...
