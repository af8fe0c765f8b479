# =============================================================================
# agent/__init__.py
# =============================================================================
# The console agent: a Google ADK Agent (LLM via LiteLlm) that reaches Dixa
# only through the MCP tool server in tools/.
#
#   prompt.py         → system prompt (date + timezone injected)
#   support_agent.py  → Agent + MCPToolset wiring
#
# The agent decides WHICH tools to call and how to explain the results.
# Validation, HTTP and error mapping all happen in core/.
# =============================================================================
