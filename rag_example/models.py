"""Pydantic models shared by the adapters.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Document(BaseModel):
    """A unit of text returned by a similarity search.

    ``score`` is higher for more similar documents; it is None when the
    store did not report a distance.
    """
    id: Optional[str] = None
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    score: Optional[float] = None

    model_config = {"frozen": True}
