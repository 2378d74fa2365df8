"""Implementation of the LLMInterface using the Ollama API.
"""

import logging
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional

import httpx
import ollama

from rag_example.core.config import Settings
from rag_example.core.errors import GenerationUnavailable
from rag_example.interfaces.llm_interface import LLMInterface

logger = logging.getLogger(__name__)

# Errors the ollama library raises when the server is down or misbehaves.
# Newer ollama releases wrap httpx.ConnectError in the builtin ConnectionError.
OLLAMA_ERRORS = (ollama.ResponseError, httpx.HTTPError, ConnectionError)


def _message_content(response: Any) -> str:
    """Extracts ``message.content`` from a chat response or stream chunk.

    Raises:
        GenerationUnavailable: If the response does not carry string content.
    """
    try:
        message = response.get('message')
        content = message.get('content') if message is not None else None
    except AttributeError as e:
        raise GenerationUnavailable(f"Malformed response from Ollama: {response!r}") from e
    if not isinstance(content, str):
        raise GenerationUnavailable(f"Malformed response from Ollama, missing message content: {response!r}")
    return content


class OllamaClient(LLMInterface):
    """Connects to an Ollama instance to provide chat completions.

    Implements the LLMInterface protocol.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[ollama.Client] = None,
        async_client: Optional[ollama.AsyncClient] = None,
    ):
        """Initializes the Ollama client.

        Args:
            settings: The application settings containing Ollama configuration.
            client: Optional pre-built synchronous client.
            async_client: Optional pre-built asynchronous client.
        """
        self.client = client or ollama.Client(host=settings.ollama_base_url)
        self.async_client = async_client or ollama.AsyncClient(host=settings.ollama_base_url)
        self.model = settings.default_model
        logger.info(f"Ollama client initialized for host: {settings.ollama_base_url} (model: {self.model})")

    def _messages(self, prompt: str) -> List[Dict[str, str]]:
        return [{"role": "user", "content": prompt}]

    def complete(self, prompt: str) -> str:
        """Generates a reply using the Ollama /api/chat endpoint.

        Args:
            prompt: The user prompt.

        Returns:
            The full generated text.

        Raises:
            GenerationUnavailable: If Ollama is unreachable, returns an error
                or a response without message content.
        """
        logger.debug(f"Completing with model '{self.model}'. Prompt: '{prompt[:50]}...'")
        try:
            response = self.client.chat(
                model=self.model,
                messages=self._messages(prompt),
                stream=False,
            )
        except OLLAMA_ERRORS as e:
            logger.error(f"Ollama chat request failed: {e}")
            raise GenerationUnavailable(f"Ollama chat request failed: {e}") from e

        content = _message_content(response)
        logger.debug(f"Completion (first 50 chars): '{content[:50]}...'")
        return content

    def stream(self, prompt: str) -> Iterator[str]:
        """Streams reply fragments from the Ollama /api/chat endpoint.

        Nothing is sent until the first fragment is requested. Closing the
        returned generator closes the HTTP stream.

        Raises:
            GenerationUnavailable: On connection errors, API errors or
                malformed chunks, at the point of iteration.
        """
        logger.debug(f"Streaming with model '{self.model}'. Prompt: '{prompt[:50]}...'")
        chunks = None
        try:
            chunks = self.client.chat(
                model=self.model,
                messages=self._messages(prompt),
                stream=True,
            )
            for chunk in chunks:
                fragment = _message_content(chunk)
                if fragment:
                    yield fragment
        except OLLAMA_ERRORS as e:
            logger.error(f"Ollama chat stream failed: {e}")
            raise GenerationUnavailable(f"Ollama chat stream failed: {e}") from e
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()
            logger.debug("Ollama chat stream closed.")

    async def astream(self, prompt: str) -> AsyncIterator[str]:
        """Async variant of ``stream`` backed by ``ollama.AsyncClient``.

        Cancellation (for example an HTTP client disconnect) closes the
        underlying stream before propagating.
        """
        logger.debug(f"Async streaming with model '{self.model}'. Prompt: '{prompt[:50]}...'")
        chunks = None
        try:
            chunks = await self.async_client.chat(
                model=self.model,
                messages=self._messages(prompt),
                stream=True,
            )
            async for chunk in chunks:
                fragment = _message_content(chunk)
                if fragment:
                    yield fragment
        except OLLAMA_ERRORS as e:
            logger.error(f"Ollama async chat stream failed: {e}")
            raise GenerationUnavailable(f"Ollama chat stream failed: {e}") from e
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
            logger.debug("Ollama async chat stream closed.")
