# =============================================================================
# core/tags.py  —  Tag tools
# =============================================================================
#
# listTags and getConversationTags are plain reads.  tagConversation (PUT)
# and removeConversationTag (DELETE) change data in Dixa but are idempotent:
# attaching a tag twice, or removing one that is already gone, leaves the
# conversation in the same state, so the caller may retry them.
#
# Dixa answers both mutations with 204 No Content.  The Endpoint's
# acknowledgement turns that into {"success": true, "message": ...}.
# =============================================================================

from core.adapter import make_tool
from core.models import Endpoint
from core.schema import ParameterSchema, boolean, identifier

LIST_TAGS = make_tool(
    name="listTags",
    description="List all available tags in Dixa",
    parameters=ParameterSchema.of(
        boolean("includeDeactivated", "Whether to include deactivated tags",
                required=False, default=False),
    ),
    endpoint=Endpoint(
        method="GET",
        path="/tags",
        action="fetch tags",
        query=("includeDeactivated",),
    ),
)

GET_CONVERSATION_TAGS = make_tool(
    name="getConversationTags",
    description="Get all tags associated with a specific conversation from Dixa",
    parameters=ParameterSchema.of(
        identifier("conversationId", "The ID of the conversation to fetch tags for"),
    ),
    endpoint=Endpoint(
        method="GET",
        path="/conversations/{conversationId}/tags",
        action="fetch conversation tags",
    ),
)

TAG_CONVERSATION = make_tool(
    name="tagConversation",
    description="Add a tag to a specific conversation in Dixa",
    parameters=ParameterSchema.of(
        identifier("conversationId", "The ID of the conversation to tag"),
        identifier("tagId", "The ID of the tag to add to the conversation"),
    ),
    endpoint=Endpoint(
        method="PUT",
        path="/conversations/{conversationId}/tags/{tagId}",
        action="tag conversation",
        acknowledgement="Tag added successfully",
    ),
)

REMOVE_CONVERSATION_TAG = make_tool(
    name="removeConversationTag",
    description="Remove a tag from a specific conversation in Dixa",
    parameters=ParameterSchema.of(
        identifier("conversationId", "The ID of the conversation to remove the tag from"),
        identifier("tagId", "The ID of the tag to remove from the conversation"),
    ),
    endpoint=Endpoint(
        method="DELETE",
        path="/conversations/{conversationId}/tags/{tagId}",
        action="remove conversation tag",
        acknowledgement="Tag removed successfully",
    ),
)

TOOLS = (
    LIST_TAGS,
    GET_CONVERSATION_TAGS,
    TAG_CONVERSATION,
    REMOVE_CONVERSATION_TAG,
)
