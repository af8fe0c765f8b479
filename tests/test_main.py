import json

from main import describe_tool_response


def _mcp_text(text, is_error=False):
    response = {"content": [{"type": "text", "text": text}]}
    if is_error:
        response["isError"] = True
    return response


def test_mcp_error_is_reported_with_first_line():
    message = 'Failed to fetch agent: 404 Not Found\nResponse: {"error":"not found"}'
    failed, summary = describe_tool_response("getAgent", _mcp_text(message, is_error=True))
    assert failed is True
    assert summary == "getAgent failed: Failed to fetch agent: 404 Not Found"


def test_adk_side_error_is_reported():
    failed, summary = describe_tool_response("listTags", {"error": "connection closed"})
    assert failed is True
    assert "connection closed" in summary


def test_list_response_counts_records():
    body = json.dumps({"data": [{"id": "a1"}, {"id": "a2"}]}, indent=2)
    assert describe_tool_response("listAgents", _mcp_text(body)) == (False, "listAgents returned 2 record(s)")


def test_acknowledgement_is_echoed():
    body = json.dumps({"success": True, "message": "Tag added successfully"})
    failed, summary = describe_tool_response("tagConversation", _mcp_text(body))
    assert failed is False
    assert summary == "tagConversation: Tag added successfully"


def test_other_payloads_report_size():
    failed, summary = describe_tool_response("getConversation", _mcp_text('{"id": "c1"}'))
    assert failed is False
    assert summary == "getConversation returned 12 characters"
    assert describe_tool_response("getConversation", None) == (False, "getConversation returned 0 characters")
