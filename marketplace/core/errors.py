"""Domain error taxonomy.

Services raise these; ``marketplace.api.errors`` renders them as
``{"message": ..., **details}`` with the class's status code.  The
message of PaymentRequired is a stable client contract: the front end
branches on the literal string "Payment required".
"""

from __future__ import annotations

from typing import Any


class MarketplaceError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(MarketplaceError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(MarketplaceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(MarketplaceError):
    status_code = 404
    default_message = "Not found"


class Conflict(MarketplaceError):
    # Duplicate enrollment is reported as a plain 400 to clients.
    status_code = 400
    default_message = "Already exists"


class PaymentRequired(MarketplaceError):
    status_code = 402
    default_message = "Payment required"


class InvalidArgument(MarketplaceError):
    status_code = 400
    default_message = "Invalid argument"


class Internal(MarketplaceError):
    status_code = 500
    default_message = "Internal server error"
