"""JSON endpoint running a single retrieve-then-generate pass.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from rag_example.api.models import ErrorResponse, QueryRequest, QueryResponse
from rag_example.core.dependencies import get_rag_service
from rag_example.query.rag_service import RAGService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Query"],
    responses={503: {"model": ErrorResponse, "description": "Vector store or chat model unavailable"}},
)

@router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    rag_service: RAGService = Depends(get_rag_service),
) -> QueryResponse:
    """Answers ``request.message`` using the RAG service.

    RAGService.answer is blocking, so it runs in the threadpool.
    """
    logger.info(f"Received query: '{request.message[:50]}...'")
    answer = await run_in_threadpool(rag_service.answer, request.message)
    return QueryResponse(answer=answer)
