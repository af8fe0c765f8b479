import json

import pytest

from core.catalog import ALL_TOOLS, build_registry
from core.errors import ConfigurationError, ParameterValidationError, RemoteAPIError

from tests.conftest import BASE_URL

PRESET_WEEK = {"_type": "Preset", "value": {"_type": "PreviousWeek"}}
JANUARY = {"from": "2024-01-01T00:00:00Z", "to": "2024-01-31T23:59:59Z"}

# Minimal valid arguments for every tool in the catalog.
VALID_ARGS = {
    "searchConversations": {"query": "refund"},
    "getConversation": {"conversationId": "c1"},
    "getConversationMessages": {"conversationId": "c1"},
    "getConversationNotes": {"conversationId": "c1"},
    "getConversationRatings": {"conversationId": "c1"},
    "getConversationTags": {"conversationId": "c1"},
    "listTags": {},
    "tagConversation": {"conversationId": "c1", "tagId": "t1"},
    "removeConversationTag": {"conversationId": "c1", "tagId": "t1"},
    "getAgent": {"agentId": "a1"},
    "listAgents": {},
    "getEndUser": {"userId": "u1"},
    "getEndUserConversations": {"userId": "u1"},
    "listAnalyticsMetrics": {},
    "listAnalyticsRecords": {},
    "getAnalyticsMetric": {"metricId": "csat"},
    "getAnalyticsRecord": {"recordId": "ratings"},
    "getAnalyticsFilter": {"filterAttribute": "channel"},
    "getAnalyticsMetricsData": {
        "metricId": "closed_conversations",
        "periodFilter": PRESET_WEEK,
        "aggregations": ["Count"],
        "timezone": "Europe/Copenhagen",
    },
    "getAnalyticsRecordsData": {
        "recordId": "ratings",
        "periodFilter": JANUARY,
        "timezone": "Europe/Copenhagen",
    },
}

TOOLS_BY_NAME = {tool.name: tool for tool in ALL_TOOLS}
TOOLS_WITH_REQUIRED = [tool for tool in ALL_TOOLS if any(f.required for f in tool.parameters.fields)]


def _ids(tools):
    return [tool.name for tool in tools]


def test_catalog_names_are_unique_and_covered():
    names = [tool.name for tool in ALL_TOOLS]
    assert len(names) == len(set(names)) == 20
    assert set(names) == set(VALID_ARGS)
    assert build_registry().names() == names


def test_every_tool_publishes_a_complete_schema():
    for tool in ALL_TOOLS:
        schema = tool.input_schema()
        assert schema["type"] == "object"
        for name, prop in schema["properties"].items():
            assert prop["description"], f"{tool.name}.{name} has no description"
        assert set(schema["required"]) <= set(schema["properties"])


# =============================================================================
# Properties that hold for every tool
# =============================================================================
@pytest.mark.asyncio
@pytest.mark.parametrize("tool", TOOLS_WITH_REQUIRED, ids=_ids(TOOLS_WITH_REQUIRED))
async def test_missing_required_parameter_issues_no_request(tool, context, stub):
    with pytest.raises(ParameterValidationError) as excinfo:
        await tool.execute({}, context)
    assert excinfo.value.constraint == "is required"
    assert stub.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", ALL_TOOLS, ids=_ids(ALL_TOOLS))
async def test_missing_credential_fails_first(tool, unconfigured_context, stub):
    with pytest.raises(ConfigurationError, match="DIXA_API_KEY"):
        await tool.execute(VALID_ARGS[tool.name], unconfigured_context)
    with pytest.raises(ConfigurationError):
        await tool.execute({"pageLimit": "not-a-number"}, unconfigured_context)
    assert stub.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", ALL_TOOLS, ids=_ids(ALL_TOOLS))
async def test_absent_optionals_are_not_sent(tool, context, stub):
    await tool.execute(VALID_ARGS[tool.name], context)

    request = stub.last
    body = stub.last_body()
    body_keys = dict(tool.endpoint.body)
    for field in tool.parameters.fields:
        if field.required or field.has_default:
            continue
        assert field.name not in request.url.params
        if body is not None:
            assert body_keys.get(field.name) not in body
    assert all(value != "" for value in request.url.params.values())


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", ALL_TOOLS, ids=_ids(ALL_TOOLS))
async def test_success_body_round_trips(tool, context, stub):
    payload = {"data": [{"id": "x1", "nested": {"values": [1, 2.5, None, True]}}], "pageKey": "abc"}
    stub.reply_json(200, payload)
    result = await tool.execute(VALID_ARGS[tool.name], context)
    assert result.kind == "text"
    assert json.loads(result.text) == payload


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", ALL_TOOLS, ids=_ids(ALL_TOOLS))
async def test_not_found_is_reported_verbatim(tool, context, stub):
    stub.reply(404, '{"error":"not found"}')
    with pytest.raises(RemoteAPIError) as excinfo:
        await tool.execute(VALID_ARGS[tool.name], context)
    assert "404" in str(excinfo.value)
    assert '{"error":"not found"}' in str(excinfo.value)


# =============================================================================
# Concrete scenarios
# =============================================================================
@pytest.mark.asyncio
async def test_list_agents_with_page_limit(context, stub):
    payload = {"data": [{"id": "a1"}], "pageKey": "next"}
    stub.reply_json(200, payload)

    result = await TOOLS_BY_NAME["listAgents"].execute({"pageLimit": 10}, context)

    assert stub.last.method == "GET"
    assert str(stub.last.url) == f"{BASE_URL}/agents?pageLimit=10"
    assert json.loads(result.text) == payload


@pytest.mark.asyncio
async def test_list_agents_filters_by_email(context, stub):
    await TOOLS_BY_NAME["listAgents"].execute({"email": "ann@example.com"}, context)
    assert stub.last.url.params["email"] == "ann@example.com"
    assert stub.last.url.params["pageLimit"] == "50"


@pytest.mark.asyncio
@pytest.mark.parametrize("name, method, message", [
    ("tagConversation", "PUT", "Tag added successfully"),
    ("removeConversationTag", "DELETE", "Tag removed successfully"),
])
async def test_tag_mutations_acknowledge_no_content(name, method, message, context, stub):
    stub.reply(204)
    result = await TOOLS_BY_NAME[name].execute({"conversationId": "c1", "tagId": "t1"}, context)

    assert stub.last.method == method
    assert str(stub.last.url) == f"{BASE_URL}/conversations/c1/tags/t1"
    assert stub.last.content == b""
    assert json.loads(result.text) == {"success": True, "message": message}


@pytest.mark.asyncio
async def test_tag_mutation_with_json_reply_is_passed_through(context, stub):
    stub.reply_json(200, {"data": {"tagId": "t1"}})
    result = await TOOLS_BY_NAME["tagConversation"].execute({"conversationId": "c1", "tagId": "t1"}, context)
    assert json.loads(result.text) == {"data": {"tagId": "t1"}}


@pytest.mark.asyncio
async def test_search_conversations_query_string(context, stub):
    await TOOLS_BY_NAME["searchConversations"].execute({"query": "refund policy", "pageKey": "p2"}, context)
    params = stub.last.url.params
    assert stub.last.url.path == "/v1/search/conversations"
    assert params["query"] == "refund policy"
    assert params["exactMatch"] == "true"
    assert params["pageKey"] == "p2"
    assert params["pageLimit"] == "50"


@pytest.mark.asyncio
async def test_list_tags_sends_include_deactivated(context, stub):
    await TOOLS_BY_NAME["listTags"].execute({"includeDeactivated": True}, context)
    assert str(stub.last.url) == f"{BASE_URL}/tags?includeDeactivated=true"


@pytest.mark.asyncio
async def test_metrics_data_request(context, stub):
    arguments = dict(
        VALID_ARGS["getAnalyticsMetricsData"],
        filters=[{"attribute": "channel", "values": ["email"]}],
        pageKey="k2",
    )
    await TOOLS_BY_NAME["getAnalyticsMetricsData"].execute(arguments, context)

    assert stub.last.method == "POST"
    assert stub.last.url.path == "/v1/analytics/metrics"
    assert dict(stub.last.url.params) == {"pageKey": "k2", "pageLimit": "50"}
    assert stub.last_body() == {
        "id": "closed_conversations",
        "periodFilter": PRESET_WEEK,
        "filters": [{"attribute": "channel", "values": ["email"]}],
        "aggregations": ["Count"],
        "timezone": "Europe/Copenhagen",
    }


@pytest.mark.asyncio
async def test_metrics_data_rejects_mapping_filters(context, stub):
    arguments = dict(VALID_ARGS["getAnalyticsMetricsData"], filters={"channel": ["email"]})
    with pytest.raises(ParameterValidationError) as excinfo:
        await TOOLS_BY_NAME["getAnalyticsMetricsData"].execute(arguments, context)
    assert excinfo.value.field == "filters"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_records_data_request(context, stub):
    arguments = dict(VALID_ARGS["getAnalyticsRecordsData"], filters={"channel": ["email"]})
    await TOOLS_BY_NAME["getAnalyticsRecordsData"].execute(arguments, context)

    assert stub.last.method == "POST"
    assert str(stub.last.url) == f"{BASE_URL}/analytics/records/ratings/data"
    assert stub.last_body() == {
        "periodFilter": JANUARY,
        "filters": {"channel": ["email"]},
        "timezone": "Europe/Copenhagen",
    }


@pytest.mark.asyncio
async def test_records_data_sends_timestamps_as_given(context, stub):
    period = {"from": "2024-01-01T00:00:00.1234Z", "to": "2024-01-02"}
    arguments = dict(VALID_ARGS["getAnalyticsRecordsData"], periodFilter=period)
    await TOOLS_BY_NAME["getAnalyticsRecordsData"].execute(arguments, context)
    assert stub.last_body()["periodFilter"] == period


@pytest.mark.asyncio
async def test_records_data_rejects_preset_period(context, stub):
    arguments = dict(VALID_ARGS["getAnalyticsRecordsData"], periodFilter=PRESET_WEEK)
    with pytest.raises(ParameterValidationError) as excinfo:
        await TOOLS_BY_NAME["getAnalyticsRecordsData"].execute(arguments, context)
    assert excinfo.value.field == "periodFilter"
    assert stub.requests == []


def test_read_only_flags():
    mutating = {tool.name for tool in ALL_TOOLS if not tool.read_only}
    assert mutating == {"tagConversation", "removeConversationTag"}
