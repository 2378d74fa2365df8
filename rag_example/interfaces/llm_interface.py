"""Interface definition for Large Language Model (LLM) services.
"""

from typing import Protocol, AsyncIterator, Iterator, runtime_checkable

@runtime_checkable
class LLMInterface(Protocol):
    """A protocol defining the standard interface for chat model interactions.

    ``complete`` blocks for the whole answer, ``stream`` and ``astream`` yield
    text fragments in generation order. All three raise GenerationUnavailable
    when the model endpoint fails.
    """

    def complete(self, prompt: str) -> str:
        """Sends ``prompt`` as a user message and returns the full reply text."""
        ...

    def stream(self, prompt: str) -> Iterator[str]:
        """Sends ``prompt`` and lazily yields reply fragments.

        The iterator is single-pass; closing it releases the connection.
        """
        ...

    def astream(self, prompt: str) -> AsyncIterator[str]:
        """Async counterpart of ``stream`` for use inside the event loop."""
        ...
