from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict, List

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Envelope for every successful catalog response."""
    message: str = Field(..., description="Short human-readable outcome.")
    data: Optional[DataType] = Field(None, description="Payload, if the operation returns one.")

class DeletedEntity(BaseModel):
    id: str

class CacheStats(BaseModel):
    size: int
    keys: List[str]

class CacheInvalidation(BaseModel):
    pattern: Optional[str] = None
    removed: int

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Machine-readable error kind, e.g. DUPLICATE_VALUE")
    message: str = Field(..., description="Message safe to show to the user")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context, never store internals")

class ErrorResponse(BaseModel):
    error: ErrorDetail
    timestamp: str = Field(..., description="ISO 8601 time the error was produced")
    path: str
    request_id: Optional[str] = None
