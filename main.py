# =============================================================================
# main.py  —  Entry Point for the Dixa Support Analyst console
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (DIXA_API_KEY, OPENROUTER_API_KEY, ...)
#   2. Creates the ADK agent (agent/support_agent.py), which spawns the MCP
#      tool server (tools/mcp_server.py) as a subprocess
#   3. Reads questions from the terminal and streams the agent's work:
#      every tool call and its outcome is printed as it happens, then the
#      final answer
# =============================================================================

import asyncio
import json
from typing import Any, Optional

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm reads provider keys, and the
# tool-server subprocess inherits DIXA_* from this process's environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.support_agent import create_agent

APP_NAME = "dixa_support_analyst"
USER_ID = "console_user"

# Longest error line echoed to the console; the agent still sees all of it.
_MAX_ERROR_CHARS = 300


def describe_tool_response(name: str, response: Optional[dict[str, Any]]) -> tuple[bool, str]:
    """Summarize one tool result as ADK hands it back from the MCP server.

    MCP failures arrive as ``{"isError": true, "content": [{"text": ...}]}``;
    ADK-side failures as ``{"error": ...}``.  Dixa list endpoints answer with
    ``{"data": [...]}``, so successful calls report how many records came back.

    Returns:
        (failed, one-line summary)
    """
    response = response or {}
    texts = [
        block.get("text", "")
        for block in response.get("content", [])
        if isinstance(block, dict) and block.get("type", "text") == "text"
    ]
    text = texts[0] if texts else ""

    if response.get("isError") or "error" in response:
        message = text or str(response.get("error", "unknown error"))
        first_line = message.strip().splitlines()[0] if message.strip() else "unknown error"
        return True, f"{name} failed: {first_line[:_MAX_ERROR_CHARS]}"

    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return False, f"{name} returned {len(payload['data'])} record(s)"
    if isinstance(payload, dict) and payload.get("success") is True:
        return False, f"{name}: {payload.get('message', 'done')}"
    return False, f"{name} returned {len(text)} characters"


async def run_agent():
    """Run the support analyst agent interactively."""

    # =========================================================================
    # Step 1: Create the agent
    # =========================================================================
    print("=" * 70)
    print("  DIXA SUPPORT ANALYST")
    print("  Powered by Google ADK + LiteLLM + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # =========================================================================
    # Step 2: Create a Runner and Session
    # =========================================================================
    # One session for the whole console run, so follow-up questions ("and
    # the week before?") keep the earlier tool results in context.
    # =========================================================================
    session_service = InMemorySessionService()

    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )

    session = await session_service.create_session(
        app_name=APP_NAME,
        user_id=USER_ID,
    )

    print("✅ Agent initialized and ready!\n")

    # =========================================================================
    # Step 3: Interactive loop
    # =========================================================================
    print("💬 Ask about conversations, customers, agents, tags or analytics.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        # =====================================================================
        # Step 4: Stream the agent's work
        # =====================================================================
        #   function_call      → the agent asks a Dixa tool for data
        #   function_response  → what the tool returned (or why it failed)
        #   text               → the agent's explanation; the last one wins
        # =====================================================================
        final_response = ""
        tool_calls = 0
        failed_calls = 0

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not (event.content and event.content.parts):
                continue

            for part in event.content.parts:
                if getattr(part, "text", None):
                    final_response = part.text

                if getattr(part, "function_call", None):
                    call = part.function_call
                    tool_calls += 1
                    print(f"  🔧 Calling tool: {call.name} {dict(call.args or {})}")

                if getattr(part, "function_response", None):
                    result = part.function_response
                    failed, summary = describe_tool_response(result.name, result.response)
                    if failed:
                        failed_calls += 1
                        print(f"  ❌ {summary}")
                    else:
                        print(f"  ✅ {summary}")

        print("-" * 70)
        if tool_calls:
            print(f"  {tool_calls} tool call(s), {failed_calls} failed")
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
