from typing import List
from pydantic import BaseModel, Field

from features.common.exceptions.upstream_exceptions import UpstreamError

class ErrorDetail(BaseModel):
    """A single upstream failure."""
    source: str = Field(..., description="Data feed that failed")
    name: str = Field(..., description="Exception type")
    message: str = Field(..., description="Error message")

    @classmethod
    def from_exception(cls, error: Exception, source: str) -> "ErrorDetail":
        if isinstance(error, UpstreamError):
            source = error.source
        return cls(
            source=source,
            name=type(error).__name__,
            message=str(error) or type(error).__name__
        )

class ErrorResponse(BaseModel):
    """Error payload returned when a request can't be served."""
    errors: List[ErrorDetail] = Field(..., description="Every failure collected for the request")
