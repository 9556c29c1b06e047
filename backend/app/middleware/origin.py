"""
Origin allow-list guard.

Browsers attach an Origin header to cross-origin requests. When the header is
present and not on the configured allow-list the request is answered with
403 before it reaches any route. Requests without an Origin header (server to
server, curl, same-origin GETs) pass through. A "*" entry disables the check.

CORS response headers themselves are produced by Starlette's CORSMiddleware.
"""

import logging
from typing import Callable, Iterable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.errors import OriginRejectedError

logger = logging.getLogger(__name__)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: FastAPI, allowed_origins: Iterable[str] = ()):
        super().__init__(app)
        self.allowed_origins = {origin.rstrip("/") for origin in allowed_origins}
        self.allow_all = "*" in self.allowed_origins

    def is_allowed(self, origin: str) -> bool:
        return self.allow_all or origin.rstrip("/") in self.allowed_origins

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        if origin and not self.is_allowed(origin):
            error = OriginRejectedError()
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
            return JSONResponse(status_code=error.status_code, content={"error": error.message})
        return await call_next(request)
