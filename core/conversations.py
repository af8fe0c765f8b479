# =============================================================================
# core/conversations.py  —  Conversation tools
# =============================================================================
#
# Read-only access to conversations: full-text search, a single
# conversation, and its messages, internal notes and ratings.
# All of these are GETs and safe to retry.
# =============================================================================

from core.adapter import make_tool
from core.models import Endpoint
from core.schema import ParameterSchema, boolean, identifier, page_key, page_limit, string


def _conversation_id(purpose: str):
    return identifier("conversationId", f"The ID of the conversation to {purpose}")


SEARCH_CONVERSATIONS = make_tool(
    name="searchConversations",
    description="Search conversations in Dixa",
    parameters=ParameterSchema.of(
        string("query", "The search query string"),
        boolean("exactMatch", "Whether to perform exact matching", required=False, default=True),
        page_key(),
        page_limit(),
    ),
    endpoint=Endpoint(
        method="GET",
        path="/search/conversations",
        action="search conversations",
        query=("query", "exactMatch", "pageKey", "pageLimit"),
    ),
)

GET_CONVERSATION = make_tool(
    name="getConversation",
    description="Get a specific conversation from Dixa",
    parameters=ParameterSchema.of(_conversation_id("fetch")),
    endpoint=Endpoint(
        method="GET",
        path="/conversations/{conversationId}",
        action="fetch conversation",
    ),
)

GET_CONVERSATION_MESSAGES = make_tool(
    name="getConversationMessages",
    description="Get all messages for a specific conversation from Dixa",
    parameters=ParameterSchema.of(_conversation_id("fetch messages for")),
    endpoint=Endpoint(
        method="GET",
        path="/conversations/{conversationId}/messages",
        action="fetch conversation messages",
    ),
)

GET_CONVERSATION_NOTES = make_tool(
    name="getConversationNotes",
    description="Get all internal notes for a specific conversation from Dixa",
    parameters=ParameterSchema.of(_conversation_id("fetch notes for")),
    endpoint=Endpoint(
        method="GET",
        path="/conversations/{conversationId}/notes",
        action="fetch conversation notes",
    ),
)

GET_CONVERSATION_RATINGS = make_tool(
    name="getConversationRatings",
    description="Get all ratings for a specific conversation from Dixa",
    parameters=ParameterSchema.of(_conversation_id("fetch ratings for")),
    endpoint=Endpoint(
        method="GET",
        path="/conversations/{conversationId}/ratings",
        action="fetch conversation ratings",
    ),
)

TOOLS = (
    SEARCH_CONVERSATIONS,
    GET_CONVERSATION,
    GET_CONVERSATION_MESSAGES,
    GET_CONVERSATION_NOTES,
    GET_CONVERSATION_RATINGS,
)
