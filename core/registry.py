# =============================================================================
# core/registry.py  —  Name → ToolSpec lookup and invocation routing
# =============================================================================
#
# The registry only enforces unique names, lists what is registered, and
# forwards invoke(name, ...) to the matching ToolSpec.  It holds no
# per-call state, so concurrent invocations never interact.
# =============================================================================

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional

from core.errors import DuplicateToolError, UnknownToolError
from core.models import ExecutionContext, TextResult, ToolSpec


class ToolRegistry:
    """Insertion-ordered collection of uniquely named tools."""

    def __init__(self, tools: Iterable[ToolSpec] = ()) -> None:
        self._tools: dict[str, ToolSpec] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolSpec) -> ToolSpec:
        if tool.name in self._tools:
            raise DuplicateToolError(f"A tool named '{tool.name}' is already registered")
        self._tools[tool.name] = tool
        return tool

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(f"No tool registered with name '{name}'") from None

    def names(self) -> list[str]:
        return list(self._tools)

    def describe(self) -> list[dict[str, Any]]:
        """Discovery payload: one {name, description, inputSchema} per tool."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema(),
            }
            for tool in self._tools.values()
        ]

    async def invoke(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]],
        context: ExecutionContext,
    ) -> TextResult:
        return await self.get(name).execute(arguments, context)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
