"""
Middleware for request context and logging
"""

import re
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

# GraphQL payload parameters never written to the request log
REDACTED_GRAPHQL_PARAMS = ("query", "variables", "extensions")


def sanitize_query_params(path: str, params: dict[str, Any]) -> dict[str, Any]:
    """Redact GraphQL documents and variables from logged query parameters."""
    if path != "/graphql":
        return params
    return {
        key: "[REDACTED]" if key in REDACTED_GRAPHQL_PARAMS else value
        for key, value in params.items()
    }


def extract_graphql_operation_name(request: Request) -> str | None:
    """Best-effort operation label for GET /graphql requests."""
    if request.url.path != "/graphql" or request.method != "GET":
        return None

    params = request.query_params
    op = params.get("operationName")
    if op:
        return op

    q = params.get("query", "")
    if not q:
        return None
    if "__schema" in q:
        return "__introspection"

    match = re.search(r"\b(query|mutation)\s+(\w+)", q)
    if match:
        kind = "mutation:" if match.group(1) == "mutation" else ""
        return f"{kind}{match.group(2)}"
    return "mutation:unnamed_operation" if q.lstrip().startswith("mutation") else "unnamed_operation"


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and set logging context."""
        set_request_context(request.headers.get("x-request-id"))

        try:
            sanitized_params = None
            if request.query_params:
                sanitized_params = sanitize_query_params(
                    request.url.path, dict(request.query_params)
                )

            graphql_operation = extract_graphql_operation_name(request)

            log_data = {
                "method": request.method,
                "path": request.url.path,
                "query_params": sanitized_params,
                "user_agent": request.headers.get("user-agent"),
                "remote_addr": request.client.host if request.client else None,
            }
            if graphql_operation:
                log_data["graphql_operation"] = graphql_operation

            logger.info("Request started", **log_data)

            response = await call_next(request)

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
                graphql_operation=graphql_operation,
            )

            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
