"""Pydantic models for API request and response bodies.
"""

from pydantic import BaseModel, Field

class QueryRequest(BaseModel):
    """Request model for submitting a question to the RAG service.
    """
    message: str = Field(..., min_length=1, description="The user's question.")

class QueryResponse(BaseModel):
    """Response model for the RAG service's answer.
    """
    answer: str = Field(..., description="The generated answer based on retrieved documents.")

class ErrorResponse(BaseModel):
    """Body returned when an adapter is unavailable."""
    detail: str
    error: str
