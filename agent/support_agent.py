# =============================================================================
# agent/support_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the support analyst agent: Google ADK for orchestration, any
#   LiteLLM-supported model for reasoning, and the Dixa tools over MCP.
#
#   ┌──────────────────────────────────────────────┐
#   │               Google ADK Agent               │
#   │  prompt.py ──▶ LLM (LiteLlm) ──▶ MCPToolset  │
#   └──────────────────────────────────────────────┘
#                                        │ stdio
#                                        ▼
#                          ┌───────────────────────────┐
#                          │  tools/mcp_server.py      │
#                          │  (FastMCP, 20 Dixa tools) │
#                          └───────────────────────────┘
#                                        │ httpx
#                                        ▼
#                               https://dev.dixa.io/v1
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess and talks to it over
#   stdin/stdout.  The subprocess gets this process's environment so that
#   DIXA_API_KEY (possibly loaded from .env by main.py) reaches it.
#
# MODEL:
#   DIXA_AGENT_MODEL selects the LiteLLM model string, e.g.
#     "openrouter/openai/gpt-4o"                (default)
#     "openrouter/anthropic/claude-3.5-sonnet"
#   The matching provider key (OPENROUTER_API_KEY, ...) must be set.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import DEFAULT_TIMEZONE, get_support_analyst_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
AGENT_MODEL_ENV = "DIXA_AGENT_MODEL"
AGENT_TIMEZONE_ENV = "DIXA_TIMEZONE"


def create_agent() -> Agent:
    """Create and configure the Dixa support analyst agent.

    Returns:
        A configured Google ADK Agent instance.
    """

    # =========================================================================
    # Step 1: Configure the MCP tool connection
    # =========================================================================
    # The server is started as a module from the project root so that the
    # core/ package resolves whether or not the project is pip-installed.
    # =========================================================================
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
            env=dict(os.environ),
        ),
    )

    # =========================================================================
    # Step 2: Create the ADK Agent
    # =========================================================================
    model = os.environ.get(AGENT_MODEL_ENV) or DEFAULT_MODEL
    timezone = os.environ.get(AGENT_TIMEZONE_ENV) or DEFAULT_TIMEZONE

    agent = Agent(
        name="dixa_support_analyst",
        model=LiteLlm(model=model),
        instruction=get_support_analyst_prompt(timezone=timezone),
        tools=[mcp_tools],
    )

    return agent
