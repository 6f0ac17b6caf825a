from typing import List

from fastapi import Response
from fastapi.responses import JSONResponse

from features.common.models.error_types import ErrorDetail, ErrorResponse

def apply_cache_headers(response: Response, cache_hit: bool, ttl: int) -> None:
    """Mark a response as served from cache or freshly fetched."""
    response.headers["X-Cache"] = "HIT" if cache_hit else "MISS"
    if not cache_hit:
        response.headers["Cache-Control"] = f"public, max-age={ttl}, s-maxage={ttl}"

def error_response(errors: List[ErrorDetail]) -> JSONResponse:
    """Build the 500 response listing every upstream failure."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(errors=errors).model_dump()
    )
