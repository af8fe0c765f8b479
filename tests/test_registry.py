import json

import pytest

from core.adapter import make_tool
from core.catalog import ALL_TOOLS, build_registry
from core.errors import DuplicateToolError, UnknownToolError
from core.models import Endpoint
from core.registry import ToolRegistry
from core.schema import ParameterSchema, identifier

from tests.conftest import BASE_URL


def _tool(name: str):
    return make_tool(
        name,
        f"Fetch a {name}",
        ParameterSchema.of(identifier("thingId", "Thing identifier")),
        Endpoint(method="GET", path="/things/{thingId}", action=f"fetch {name}"),
    )


def test_register_rejects_duplicate_names():
    registry = ToolRegistry([_tool("getThing")])
    with pytest.raises(DuplicateToolError):
        registry.register(_tool("getThing"))
    assert len(registry) == 1


def test_duplicate_is_a_value_error():
    with pytest.raises(ValueError):
        ToolRegistry([_tool("a"), _tool("a")])


def test_get_unknown_name():
    registry = ToolRegistry()
    with pytest.raises(UnknownToolError):
        registry.get("nope")
    with pytest.raises(KeyError):
        registry.get("nope")


def test_names_keep_registration_order():
    registry = ToolRegistry([_tool("b"), _tool("a"), _tool("c")])
    assert registry.names() == ["b", "a", "c"]
    assert "a" in registry
    assert "z" not in registry
    assert [tool.name for tool in registry] == ["b", "a", "c"]


def test_describe_lists_name_description_and_schema():
    registry = ToolRegistry([_tool("getThing")])
    (entry,) = registry.describe()
    assert entry["name"] == "getThing"
    assert entry["description"] == "Fetch a getThing"
    assert entry["inputSchema"]["required"] == ["thingId"]
    json.dumps(registry.describe())


@pytest.mark.asyncio
async def test_invoke_routes_to_named_tool(context, stub):
    registry = ToolRegistry([_tool("getThing"), _tool("getOther")])
    stub.reply_json(200, {"id": "t7"})

    result = await registry.invoke("getOther", {"thingId": "t7"}, context)

    assert str(stub.last.url) == f"{BASE_URL}/things/t7"
    assert json.loads(result.text) == {"id": "t7"}


@pytest.mark.asyncio
async def test_invoke_unknown_issues_no_request(context, stub):
    registry = ToolRegistry()
    with pytest.raises(UnknownToolError):
        await registry.invoke("missing", {}, context)
    assert stub.requests == []


def test_build_registry_holds_the_full_catalog():
    registry = build_registry()
    assert len(registry) == len(ALL_TOOLS) == 20
    assert len(set(registry.names())) == 20
    described = {entry["name"] for entry in registry.describe()}
    assert described == set(registry.names())


def test_build_registry_returns_independent_instances():
    first, second = build_registry(), build_registry()
    assert first is not second
    assert first.names() == second.names()
