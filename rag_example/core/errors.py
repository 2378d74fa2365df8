"""Error kinds surfaced by the RAG example adapters.
"""


class RAGExampleError(Exception):
    """Base class for all errors raised by this package."""

    label = "rag_example_error"


class RetrievalUnavailable(RAGExampleError):
    """The vector store (or the embedding service behind it) could not be queried."""

    label = "retrieval_unavailable"


class GenerationUnavailable(RAGExampleError):
    """The chat model endpoint is unreachable or returned a malformed response."""

    label = "generation_unavailable"


class PromptTemplateMissing(RAGExampleError):
    """The prompt template asset could not be read. Fatal at startup."""

    label = "prompt_template_missing"
