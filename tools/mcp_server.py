# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (every Dixa tool in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes the core/ tool catalog over MCP.  Each core ToolSpec becomes a
#   DixaTool (a FastMCP Tool) whose name, description and input schema are
#   taken verbatim from the ToolSpec.
#
# HOW A CALL FLOWS:
#   1. The host calls a tool by name (e.g. "listAgents") with JSON arguments
#   2. FastMCP routes the call to DixaTool.run()
#   3. run() builds a fresh ExecutionContext (settings re-read from the env)
#   4. The ToolSpec validates, calls Dixa once, and normalizes the reply
#   5. Success → one text content block; failure → FastMCP ToolError
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server
#     b) Spawned by the console agent (agent/support_agent.py) over stdio
# =============================================================================

import json
import logging
import os
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import PrivateAttr

from core.catalog import build_registry
from core.config import load_settings
from core.errors import DixaToolError
from core.models import ExecutionContext, ToolSpec

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP protocol, so every log line goes to STDERR.
#   CYAN   → incoming calls (tool name + arguments)
#   GREEN  → responses
#   YELLOW → status lines
#   RED    → failures
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

# Truncate logged responses; full bodies still go to the host.
_MAX_LOGGED_RESPONSE = 2000

logging.basicConfig(
    level=os.environ.get("DIXA_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("dixa.mcp")


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the (compacted, truncated) response in GREEN, then return it."""
    try:
        compact = json.dumps(json.loads(text), separators=(",", ":"))
    except ValueError:
        compact = text
    if len(compact) > _MAX_LOGGED_RESPONSE:
        compact = compact[:_MAX_LOGGED_RESPONSE] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return text


def _log_failure(tool_name: str, error: DixaToolError) -> None:
    """Log a failed invocation in RED with its error category."""
    logger.error(f"{_RED}  ✗ {tool_name} failed [{error.code}]: {error.message}{_RESET}")


# =============================================================================
# Per-call context
# =============================================================================
def build_context(tool_name: str) -> ExecutionContext:
    """Fresh context for one invocation; settings are read at call time."""
    return ExecutionContext(
        settings=load_settings(),
        logger=logging.getLogger(f"dixa.tools.{tool_name}"),
    )


# =============================================================================
# DixaTool — a FastMCP Tool backed by a core ToolSpec
# =============================================================================
class DixaTool(Tool):
    """Adapts a core ToolSpec to FastMCP's Tool interface."""

    _spec: Optional[ToolSpec] = PrivateAttr(default=None)

    @classmethod
    def from_spec(cls, spec: ToolSpec) -> "DixaTool":
        tool = cls(
            name=spec.name,
            description=spec.description,
            parameters=spec.input_schema(),
            annotations=ToolAnnotations(
                readOnlyHint=spec.read_only,
                destructiveHint=spec.endpoint is not None and spec.endpoint.method == "DELETE",
                idempotentHint=True,
                openWorldHint=True,
            ),
        )
        tool._spec = spec
        return tool

    @property
    def spec(self) -> ToolSpec:
        if self._spec is None:
            raise RuntimeError(f"DixaTool '{self.name}' was created without a ToolSpec")
        return self._spec

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments or {})
        try:
            context = build_context(self.name)
            result = await self.spec.execute(arguments, context)
        except DixaToolError as exc:
            _log_failure(self.name, exc)
            raise ToolError(exc.message) from exc

        _log_response(self.name, result.text)
        return ToolResult(content=[TextContent(type="text", text=result.text)])


# =============================================================================
# Create the FastMCP server instance and register the catalog
# =============================================================================
# The registry rejects duplicate names before FastMCP ever sees them.
# =============================================================================
mcp = FastMCP("dixa-support-tools")

registry = build_registry()
for _spec in registry:
    mcp.add_tool(DixaTool.from_spec(_spec))


def main() -> None:
    load_dotenv()
    _log_status(f"Serving {len(registry)} Dixa tools: {', '.join(registry.names())}")
    mcp.run()


if __name__ == "__main__":
    main()
