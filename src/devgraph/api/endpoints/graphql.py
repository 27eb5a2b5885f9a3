"""GraphQL HTTP endpoint.

Both GET (document in the ``query`` parameter) and POST (JSON body) run any
operation, mutations included. The response is 200 when the result carries
no errors and 400 otherwise.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLError, parse
from pydantic import BaseModel
from pydantic import ValidationError as RequestValidationError

from ...graphql.schema import format_result
from ...logging import get_logger

logger = get_logger(__name__)


router = APIRouter()


class GraphQLRequest(BaseModel):
    query: str | None = None
    variables: dict[str, Any] | None = None
    operationName: str | None = None  # noqa: N815


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"data": None, "errors": [{"message": message}]})


async def execute(
    request: Request,
    query: str,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
) -> JSONResponse:
    """Execute a GraphQL document against the application's schema."""
    if not query.strip():
        # Report a missing document the way the parser reports any syntax error
        try:
            parse(query)
        except GraphQLError as e:
            return JSONResponse(status_code=400, content=format_result(None, [e]))

    schema = request.app.state.schema
    context = {"request": request, "repository": request.app.state.repository}

    result = await schema.execute(
        query,
        variable_values=variables,
        context_value=context,
        operation_name=operation_name,
    )

    status_code = 400 if result.errors else 200
    return JSONResponse(status_code=status_code, content=format_result(result.data, result.errors))


@router.get("/graphql")
async def graphql_get(
    request: Request,
    query: str = "",
    variables: str | None = None,
    operationName: str | None = None,  # noqa: N803
) -> JSONResponse:
    """Run the GraphQL document passed in the query string."""
    parsed_variables = None
    if variables:
        try:
            parsed_variables = json.loads(variables)
        except json.JSONDecodeError as e:
            logger.info("Rejected GraphQL variables", error=str(e))
            return error_response(f"variables are not valid JSON: {e}")
        if not isinstance(parsed_variables, dict):
            return error_response("variables must be a JSON object")

    return await execute(request, query, parsed_variables, operationName)


@router.post("/graphql")
async def graphql_post(request: Request) -> JSONResponse:
    """Run the GraphQL document passed in a JSON body."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.info("Rejected GraphQL request body", error=str(e))
        return error_response(f"request body is not valid JSON: {e}")

    try:
        body = GraphQLRequest.model_validate(payload)
    except RequestValidationError as e:
        logger.info("Rejected GraphQL request body", error=str(e))
        fields = ", ".join(".".join(str(part) for part in err["loc"]) or "body" for err in e.errors())
        return error_response(f"invalid GraphQL request: {fields}")

    return await execute(request, body.query or "", body.variables, body.operationName)
