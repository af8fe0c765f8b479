# =============================================================================
# core/__init__.py
# =============================================================================
# The tool adapter layer for the Dixa REST API.
#
#   schema.py    → declarative argument schemas + validation
#   adapter.py   → request construction, the HTTP call, response mapping
#   models.py    → Endpoint, ToolSpec, ExecutionContext, RemoteRequest, TextResult
#   registry.py  → name → tool lookup and invocation routing
#   config.py    → settings from the environment
#   errors.py    → the error taxonomy
#
#   conversations.py, tags.py, people.py, analytics.py
#                → the Dixa endpoints, each one a declarative make_tool() call
#   catalog.py   → all of the above in one registry
#
# Nothing in this package imports FastMCP or Google ADK.  The MCP server in
# tools/ and the console agent in agent/ are thin layers on top.
# =============================================================================
