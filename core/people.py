# =============================================================================
# core/people.py  —  Agent and end-user tools
# =============================================================================
#
# "Agents" are the support staff in Dixa; "end users" are the customers who
# contact them.  Both resources are read-only here.
# =============================================================================

from core.adapter import make_tool
from core.models import Endpoint
from core.schema import ParameterSchema, identifier, page_key, page_limit, string

GET_AGENT = make_tool(
    name="getAgent",
    description="Get information about a specific agent from Dixa",
    parameters=ParameterSchema.of(
        identifier("agentId", "The ID of the agent to fetch information for"),
    ),
    endpoint=Endpoint(method="GET", path="/agents/{agentId}", action="fetch agent"),
)

LIST_AGENTS = make_tool(
    name="listAgents",
    description=(
        "List all agents from Dixa to find the agent ID with optional filtering "
        "by email and phone, and pagination support"
    ),
    parameters=ParameterSchema.of(
        string("email", "Only return the agent with this email address", required=False),
        string("phone", "Only return the agent with this phone number", required=False),
        page_key(),
        page_limit(),
    ),
    endpoint=Endpoint(
        method="GET",
        path="/agents",
        action="fetch agents",
        query=("email", "phone", "pageKey", "pageLimit"),
    ),
)

GET_END_USER = make_tool(
    name="getEndUser",
    description="Get information about a specific end user from Dixa",
    parameters=ParameterSchema.of(
        identifier("userId", "The ID of the end user to fetch information for"),
    ),
    endpoint=Endpoint(method="GET", path="/endusers/{userId}", action="fetch end user"),
)

GET_END_USER_CONVERSATIONS = make_tool(
    name="getEndUserConversations",
    description="Get all conversations for a specific end user from Dixa",
    parameters=ParameterSchema.of(
        identifier("userId", "The ID of the end user to fetch conversations for"),
        page_key(),
        page_limit(),
    ),
    endpoint=Endpoint(
        method="GET",
        path="/endusers/{userId}/conversations",
        action="fetch end user conversations",
        query=("pageKey", "pageLimit"),
    ),
)

TOOLS = (
    GET_AGENT,
    LIST_AGENTS,
    GET_END_USER,
    GET_END_USER_CONVERSATIONS,
)
