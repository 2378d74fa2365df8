"""Streaming chat endpoint backed by the Ollama client.
"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from rag_example.core.dependencies import get_stream_service
from rag_example.query.rag_service import StreamService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


async def _prepend(first: str, fragments: AsyncIterator[str]) -> AsyncIterator[str]:
    """Yields ``first`` then the rest of ``fragments``, closing them on exit."""
    try:
        yield first
        async for fragment in fragments:
            yield fragment
    finally:
        await fragments.aclose()


async def _empty() -> AsyncIterator[str]:
    return
    yield


@router.get("/ollama", response_class=StreamingResponse)
async def ollama_stream(stream_service: StreamService = Depends(get_stream_service)) -> StreamingResponse:
    """Streams the model's reply to the fixed demo prompt as plain text.

    Fragments are forwarded verbatim in generation order. No retrieval is done.
    The first fragment is pulled before the response starts, so connection
    errors reach the GenerationUnavailable handler as a 503.
    """
    logger.info(f"Streaming demo prompt: '{stream_service.stream_prompt}'")
    fragments = stream_service.aanswer_stream()
    try:
        first = await fragments.__anext__()
    except StopAsyncIteration:
        return StreamingResponse(_empty(), media_type="text/plain")
    except Exception:
        await fragments.aclose()
        raise
    return StreamingResponse(_prepend(first, fragments), media_type="text/plain")
