# =============================================================================
# core/errors.py  —  Error taxonomy for the tool adapter layer
# =============================================================================
#
# Every failed invocation ends in exactly one of these exceptions:
#
#   ConfigurationError        → the credential (or another setting) is missing
#   ParameterValidationError  → an argument broke its schema contract
#   RemoteAPIError            → Dixa answered non-2xx, or never answered
#   ResponseDecodeError       → Dixa answered 2xx with a body that isn't JSON
#
# The first two are raised before any network call.  None of them are retried
# here; the invoking agent decides whether to try again.
# =============================================================================

from __future__ import annotations

from typing import Any, Optional


class DixaToolError(Exception):
    """Base class for every failure a tool invocation can report.

    Attributes:
        message: Human-readable description shown to the invoking agent.
        code: Stable, machine-readable category.
        details: Structured extras for logs (never None).
    """

    code = "tool_error"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        safe_message = message.strip() if isinstance(message, str) else ""
        if not safe_message:
            safe_message = "Unknown tool error"
        super().__init__(safe_message)
        self.message = safe_message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of the error, suitable for logs or tool output."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
            "error_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DixaToolError):
    """A required setting (normally DIXA_API_KEY) is missing or unusable."""

    code = "configuration_error"


class ParameterValidationError(DixaToolError):
    """An argument failed validation.  ``field`` is a path like ``filters[0].values``."""

    code = "validation_error"

    def __init__(self, field: str, constraint: str) -> None:
        super().__init__(
            f"Invalid argument '{field}': {constraint}",
            details={"field": field, "constraint": constraint},
        )
        self.field = field
        self.constraint = constraint


class RemoteAPIError(DixaToolError):
    """The remote call failed.

    ``status_code`` is None when no HTTP response was received at all
    (connection refused, timeout, aborted transfer).
    """

    code = "remote_error"

    def __init__(
        self,
        action: str,
        *,
        status_code: Optional[int],
        reason: str,
        body: str,
    ) -> None:
        if status_code is None:
            message = f"Failed to {action}: {reason}"
        else:
            message = f"Failed to {action}: {status_code} {reason}\nResponse: {body}"
        super().__init__(
            message,
            details={"status_code": status_code, "reason": reason, "body": body},
        )
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ResponseDecodeError(DixaToolError):
    """A 2xx response whose body could not be parsed as JSON."""

    code = "decode_error"

    def __init__(self, body: str) -> None:
        super().__init__(
            f"Invalid JSON response from server: {body}",
            details={"body": body},
        )
        self.body = body


# -----------------------------------------------------------------------------
# Registry errors — raised while wiring tools, not while running them
# -----------------------------------------------------------------------------
class DuplicateToolError(ValueError):
    """A tool with the same name is already registered."""


class UnknownToolError(KeyError):
    """No tool is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0]) if self.args else "Unknown tool"
