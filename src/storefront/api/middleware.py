"""Per-request domain context."""

from uuid import uuid4

from fastapi import Request

from storefront.domain import storefront
from storefront.utils.logging import bind_request_context


async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and tag log lines with the request."""
    bind_request_context(
        request_id=request.headers.get("X-Request-Id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("X-User-Id"),
    )
    with storefront.domain_context():
        response = await call_next(request)
    return response
