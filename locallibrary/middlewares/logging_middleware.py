import time
import uuid
from typing import List, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs every request with its status and duration, and tags
    the response with a correlation ID.
    """

    def __init__(
        self,
        app: FastAPI,
        skip_paths: Optional[List[str]] = None,
        correlation_id_header: str = "X-Correlation-ID",
    ):
        """
        Args:
            app: FastAPI application
            skip_paths: List of path prefixes to skip logging
            correlation_id_header: Header name for correlation ID
        """
        super().__init__(app)
        self.skip_paths = skip_paths or ["/health", "/favicon.ico", "/docs", "/openapi.json"]
        self.correlation_id_header = correlation_id_header

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(
            self.correlation_id_header, f"correlation-{uuid.uuid4()}"
        )
        request.state.correlation_id = correlation_id

        if any(request.url.path.startswith(path) for path in self.skip_paths):
            response = await call_next(request)
            response.headers[self.correlation_id_header] = correlation_id
            return response

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            process_time = time.time() - start_time
            logger.exception(
                f"{request.method} {request.url.path} failed after {process_time * 1000:.2f}ms",
                extra={"correlation_id": correlation_id},
            )
            raise

        process_time = time.time() - start_time
        response.headers[self.correlation_id_header] = correlation_id

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({process_time * 1000:.2f}ms)",
            extra={"correlation_id": correlation_id},
        )
        return response
