# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP hosting for the tools defined in core/.
#
#   mcp_server.py wraps every core ToolSpec in a FastMCP Tool: the name,
#   description and JSON schema come straight from the ToolSpec, and each
#   call builds a fresh ExecutionContext (settings are re-read from the
#   environment every time).
#
# No endpoint logic lives here; adding a Dixa endpoint means adding a
# make_tool() declaration in core/, not touching this package.
# =============================================================================
