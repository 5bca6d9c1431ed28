"""Error Hierarchy — typed exceptions for every ShareHub failure the API can report.

Invariants:
    - Each error class fixes its code, category, severity and HTTP status as
      class attributes; instances only add a message and context
    - 4xx errors describe the caller's request; 5xx errors describe the
      infrastructure and never carry SQL or driver text to the client
    - to_response() is the only REST envelope shape

Design Decisions:
    - One base (ShareHubError) so main.py registers a single domain handler
    - ResourceNotFoundError / NotAllowedError are the two preconditions every
      coordinator surfaces unchanged; cleanup steps treat NotFound as "nothing to do"
    - ErrorContext names the item involved, so log lines and responses can
      point at a listing or request without parsing the message
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Which item (and whose request) an error is about."""
    item_id: str | None = None
    item_kind: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ShareHubError(Exception):
    """Base exception; subclasses override the class attributes below."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "item_id": self.context.item_id,
                    "item_kind": self.context.item_kind,
                },
            }
        }


# ─── Caller errors (4xx) ─────────────────────────────────────────

class ItemValidationError(ShareHubError):
    """Item, expiration, claim or review input failed a domain check."""
    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.field = field


class ResourceNotFoundError(ShareHubError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class NotAllowedError(ShareHubError):
    """Acting user is not the author/offerer/claimer the operation requires."""
    code = "NOT_ALLOWED"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403


class ClaimQuantityError(ShareHubError):
    code = "CLAIM_QUANTITY_EXCEEDED"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 400

    def __init__(
        self, requested: int, available: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Attempted to claim {requested} item(s) but only {available} available",
            context,
        )
        self.requested = requested
        self.available = available


class OfferStateError(ShareHubError):
    """Offer is no longer active, so it cannot be accepted or withdrawn."""
    code = "OFFER_STATE_CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409

    def __init__(
        self, offer_id: str, state: str, target: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Offer '{offer_id}' is {state}; cannot become {target}", context,
        )
        self.offer_id = offer_id
        self.state = state


# ─── Infrastructure errors (5xx) ─────────────────────────────────

class DatabaseError(ShareHubError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation
