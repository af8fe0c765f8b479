# =============================================================================
# core/adapter.py  —  Generic Dixa endpoint adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   make_tool() turns (name, description, ParameterSchema, Endpoint) into a
#   ToolSpec whose execute() always runs the same pipeline:
#
#     1. require_api_key()      → ConfigurationError, no network
#     2. schema.validate()      → ParameterValidationError, no network
#     3. build_request()        → RemoteRequest (URL, headers, JSON body)
#     4. send_request()         → exactly one httpx call, no retries
#     5. normalize_response()   → TextResult | RemoteAPIError | ResponseDecodeError
#
#   Steps 3 and 5 are plain functions so they can be tested without I/O.
# =============================================================================

from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from core.config import Settings, require_api_key
from core.errors import RemoteAPIError, ResponseDecodeError
from core.models import Endpoint, ExecutionContext, RemoteRequest, TextResult, ToolSpec
from core.schema import ParameterSchema

# RFC 3986 "pchar" minus unreserved characters: everything here may appear
# unencoded inside a path segment.
_PATH_SEGMENT_SAFE = ":@!$&'()*+,;="

NO_CONTENT = 204


# =============================================================================
# Request construction
# =============================================================================
def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_request(
    endpoint: Endpoint,
    arguments: Mapping[str, Any],
    settings: Settings,
    api_key: str,
) -> RemoteRequest:
    """Map validated arguments onto a fully-formed RemoteRequest.

    Path fields are substituted (minimally percent-encoded), query fields are
    included only when present, and body fields are copied under their JSON
    key only when present.
    """
    path = endpoint.path.format(**{
        name: quote(str(arguments[name]), safe=_PATH_SEGMENT_SAFE)
        for name in endpoint.path_fields
    })

    params = {
        name: _query_value(arguments[name])
        for name in endpoint.query
        if name in arguments
    }
    url = str(httpx.URL(f"{settings.base_url}{path}", params=params or None))

    body: Optional[dict[str, Any]] = None
    if endpoint.method in ("POST", "PUT") and endpoint.body:
        body = {key: arguments[arg] for arg, key in endpoint.body if arg in arguments}

    return RemoteRequest(
        method=endpoint.method,
        url=url,
        headers={
            "Authorization": api_key,
            "Content-Type": "application/json",
        },
        body=body,
    )


# =============================================================================
# Response normalization
# =============================================================================
def normalize_response(
    endpoint: Endpoint,
    status_code: int,
    reason: str,
    body_text: str,
) -> TextResult:
    """Turn a raw HTTP reply into a TextResult or raise the matching error."""
    if not 200 <= status_code < 300:
        raise RemoteAPIError(endpoint.action, status_code=status_code, reason=reason, body=body_text)

    if status_code == NO_CONTENT and endpoint.acknowledgement is not None:
        payload: Any = {"success": True, "message": endpoint.acknowledgement}
    else:
        try:
            payload = json.loads(body_text)
        except ValueError:
            raise ResponseDecodeError(body_text) from None

    return TextResult(text=json.dumps(payload, indent=2, ensure_ascii=False))


# =============================================================================
# The single network call
# =============================================================================
async def _dispatch(client: httpx.AsyncClient, request: RemoteRequest) -> httpx.Response:
    return await client.request(
        request.method,
        request.url,
        headers=request.headers,
        json=request.body,
    )


async def send_request(
    endpoint: Endpoint,
    request: RemoteRequest,
    context: ExecutionContext,
) -> httpx.Response:
    """Issue ``request`` once.  Transport failures become RemoteAPIError."""
    try:
        if context.http_client is not None:
            return await _dispatch(context.http_client, request)
        async with httpx.AsyncClient(timeout=context.settings.timeout_seconds) as client:
            return await _dispatch(client, request)
    except asyncio.CancelledError:
        context.logger.warning("%s %s cancelled before a response arrived", request.method, request.url)
        raise
    except httpx.HTTPError as exc:
        raise RemoteAPIError(
            endpoint.action,
            status_code=None,
            reason=f"{type(exc).__name__}: {exc}",
            body="",
        ) from exc


# =============================================================================
# Tool construction
# =============================================================================
def _check_wiring(name: str, parameters: ParameterSchema, endpoint: Endpoint) -> None:
    referenced = endpoint.path_fields + endpoint.query + endpoint.body_fields
    missing = [field for field in referenced if field not in parameters]
    if missing:
        raise ValueError(f"Tool '{name}' routes fields missing from its schema: {', '.join(missing)}")
    optional_path = [field for field in endpoint.path_fields if not parameters.field(field).required]
    if optional_path:
        raise ValueError(f"Tool '{name}' has optional path fields: {', '.join(optional_path)}")


def make_tool(
    name: str,
    description: str,
    parameters: ParameterSchema,
    endpoint: Endpoint,
) -> ToolSpec:
    """Build a ToolSpec for one Dixa endpoint.

    Raises:
        ValueError: If the endpoint references fields the schema doesn't
            declare, or a path field is optional.
    """
    _check_wiring(name, parameters, endpoint)

    async def execute(arguments: Optional[Mapping[str, Any]], context: ExecutionContext) -> TextResult:
        api_key = require_api_key(context.settings)
        validated = parameters.validate(arguments)
        request = build_request(endpoint, validated, context.settings, api_key)

        context.logger.debug("Request URL: %s", request.url)
        if request.body is not None:
            context.logger.debug("Request body: %s", json.dumps(request.body))

        response = await send_request(endpoint, request, context)
        context.logger.debug("%s answered %s %s", name, response.status_code, response.reason_phrase)
        return normalize_response(endpoint, response.status_code, response.reason_phrase, response.text)

    execute.__name__ = name
    execute.__qualname__ = f"make_tool.<{name}>"
    return ToolSpec(
        name=name,
        description=description,
        parameters=parameters,
        execute=execute,
        endpoint=endpoint,
    )
