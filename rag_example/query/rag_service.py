"""Service implementing the Retrieval-Augmented Generation (RAG) query flow.
"""

import logging
from typing import AsyncIterator, Iterator, List, Optional

from rag_example.core.config import DEFAULT_STREAM_PROMPT
from rag_example.interfaces.llm_interface import LLMInterface
from rag_example.interfaces.vector_store_interface import VectorStoreInterface
from rag_example.models import Document
from rag_example.prompts.template import PromptTemplate

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3
DOCUMENT_SEPARATOR = "\n"


class StreamService:
    """Streams the chat model's reply to a fixed demo prompt. Never retrieves."""

    def __init__(self, llm: LLMInterface, stream_prompt: str = DEFAULT_STREAM_PROMPT):
        self.llm = llm
        self.stream_prompt = stream_prompt

    def answer_stream(self, prompt: Optional[str] = None) -> Iterator[str]:
        """Streams the model reply to the fixed demo prompt. No retrieval is done."""
        return self.llm.stream(prompt or self.stream_prompt)

    def aanswer_stream(self, prompt: Optional[str] = None) -> AsyncIterator[str]:
        """Async variant of ``answer_stream`` used by the HTTP endpoint."""
        return self.llm.astream(prompt or self.stream_prompt)


class RAGService(StreamService):
    """Orchestrates the RAG process: retrieve -> augment -> generate.

    Adapter errors (RetrievalUnavailable, GenerationUnavailable) propagate
    unchanged; nothing is retried.
    """

    def __init__(
        self,
        vector_store: VectorStoreInterface,
        llm: LLMInterface,
        prompt_template: PromptTemplate,
        top_k: int = DEFAULT_TOP_K,
        stream_prompt: str = DEFAULT_STREAM_PROMPT,
    ):
        """Initializes the RAGService.

        Args:
            vector_store: An instance conforming to VectorStoreInterface.
            llm: An instance conforming to LLMInterface.
            prompt_template: Template with ``{input}`` and ``{documents}`` placeholders.
            top_k: Number of documents retrieved per question.
            stream_prompt: Fixed prompt used by the streaming demo.
        """
        if top_k <= 0:
            raise ValueError(f"top_k must be > 0, got {top_k}")
        super().__init__(llm=llm, stream_prompt=stream_prompt)
        self.vector_store = vector_store
        self.prompt_template = prompt_template
        self.top_k = top_k
        logger.info(f"RAGService initialized (top_k={top_k}, template={prompt_template!r}).")

    def retrieve(self, message: str) -> List[Document]:
        """Returns the top-k documents for ``message``."""
        documents = self.vector_store.search(message, self.top_k)
        logger.debug(f"Retrieved {len(documents)} documents for message: '{message[:50]}...'")
        return documents

    def build_prompt(self, message: str) -> str:
        """Retrieves context for ``message`` and fills the prompt template.

        Document contents are joined with newlines; no documents gives an
        empty ``documents`` value.
        """
        documents = self.retrieve(message)
        context = DOCUMENT_SEPARATOR.join(doc.content for doc in documents)
        return self.prompt_template.render(input=message, documents=context)

    def answer(self, message: str) -> str:
        """Answers ``message`` with a single retrieve-then-generate pass.

        Raises:
            RetrievalUnavailable: If the vector store fails.
            GenerationUnavailable: If the chat model fails.
        """
        logger.info(f"Answering message: '{message[:100]}...'")
        prompt = self.build_prompt(message)
        answer = self.llm.complete(prompt)
        logger.debug(f"Generated answer (first 100 chars): '{answer[:100]}...'")
        return answer
