# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the tool adapter layer)
# =============================================================================
#
#   Endpoint        → how one Dixa operation is called (verb, path, fields)
#   ToolSpec        → a named, described, schema-checked, invocable tool
#   ExecutionContext→ what a single invocation gets from the host
#   RemoteRequest   → the outbound HTTP request, built fresh per call
#   TextResult      → what a successful invocation returns
#
# ToolSpecs and Endpoints are built once at import time and never change.
# ExecutionContext and RemoteRequest live for exactly one invocation.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from core.config import Settings
from core.schema import ParameterSchema

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")


# -----------------------------------------------------------------------------
# Endpoint — the declarative half of a tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Endpoint:
    """Everything needed to turn validated arguments into an HTTP request.

    Attributes:
        method: Fixed HTTP verb; never inferred from arguments.
        path: Template relative to the API base, e.g. "/agents/{agentId}".
        action: Short phrase for error messages ("fetch agent" →
            "Failed to fetch agent: 404 Not Found ...").
        query: Argument names sent as query parameters (when present).
        body: (argument name, JSON key) pairs sent in the JSON body.
        acknowledgement: If set, a 204 reply becomes
            {"success": true, "message": acknowledgement}.
    """

    method: str
    path: str
    action: str
    query: tuple[str, ...] = ()
    body: tuple[tuple[str, str], ...] = ()
    acknowledgement: Optional[str] = None

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method {self.method!r}")
        if self.body and self.method not in BODY_METHODS:
            raise ValueError(f"{self.method} {self.path} cannot carry a request body")
        overlap = set(self.query) & set(self.body_fields)
        if overlap:
            raise ValueError(f"Fields routed to both query and body: {', '.join(sorted(overlap))}")

    @property
    def path_fields(self) -> tuple[str, ...]:
        return tuple(name for _, name, _, _ in Formatter().parse(self.path) if name)

    @property
    def body_fields(self) -> tuple[str, ...]:
        return tuple(arg for arg, _ in self.body)

    @property
    def read_only(self) -> bool:
        # POST on Dixa analytics is a read-only query that just needs a body.
        return self.method in ("GET", "POST")


# -----------------------------------------------------------------------------
# TextResult — the only success shape a tool returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextResult:
    text: str
    kind: str = "text"


# -----------------------------------------------------------------------------
# ExecutionContext — handed to execute() by the host for one call
# -----------------------------------------------------------------------------
@dataclass
class ExecutionContext:
    """Per-invocation collaborators.

    ``http_client`` lets callers (and tests) supply a shared or stubbed
    httpx.AsyncClient.  When it is None the adapter opens a client for the
    duration of the single request.
    """

    settings: Settings
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("core.tools"))
    http_client: Optional[httpx.AsyncClient] = None


# -----------------------------------------------------------------------------
# RemoteRequest — derived, never cached
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RemoteRequest:
    method: str
    url: str
    headers: dict[str, str]
    body: Optional[dict[str, Any]] = None


Execute = Callable[[Optional[Mapping[str, Any]], ExecutionContext], Awaitable[TextResult]]


# -----------------------------------------------------------------------------
# ToolSpec — the unit the registry stores and the host invokes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolSpec:
    """An immutable tool descriptor.

    ``execute`` is the only behaviour; everything else is data the host can
    publish (name, description, parameters.to_json_schema()).
    """

    name: str
    description: str
    parameters: ParameterSchema
    execute: Execute
    endpoint: Optional[Endpoint] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Tool name must be a non-empty string")
        if not self.description or not self.description.strip():
            raise ValueError(f"Tool '{self.name}' needs a description")

    @property
    def read_only(self) -> bool:
        return self.endpoint.read_only if self.endpoint is not None else True

    def input_schema(self) -> dict[str, Any]:
        return self.parameters.to_json_schema()
