# =============================================================================
# core/catalog.py  —  The complete Dixa tool catalog
# =============================================================================

from core import analytics, conversations, people, tags
from core.models import ToolSpec
from core.registry import ToolRegistry

ALL_TOOLS: tuple[ToolSpec, ...] = (
    *conversations.TOOLS,
    *tags.TOOLS,
    *people.TOOLS,
    *analytics.TOOLS,
)


def build_registry() -> ToolRegistry:
    """Return a fresh registry holding every Dixa tool (duplicates raise)."""
    return ToolRegistry(ALL_TOOLS)
