"""
Domain exceptions for the asset workflow.

Services raise these when a business rule is violated; the exception handler
in ``assetverse.main`` renders them as ``{"success": false, "message": ...}``
with the class' ``status_code``.
"""
from fastapi import status


class AssetVerseError(Exception):
    """Base exception for all AssetVerse errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AssetVerseError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data"


class InvalidStateError(ValidationError):
    """Raised when a status transition is not allowed from the current state."""
    default_message = "Invalid state transition"


class AuthenticationError(AssetVerseError):
    """Missing, expired or unverifiable bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class AuthorizationError(AssetVerseError):
    """Role or ownership mismatch."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class RequestBlockedError(AuthorizationError):
    """A rejected (asset, employee) pair can never be requested again."""
    default_message = "Your previous request was rejected. Cannot request again."


class NotFoundError(AssetVerseError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AssetVerseError):
    """Duplicates and exhausted resources."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class OutOfStockError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Asset out of stock"


class QuotaExceededError(ConflictError):
    """HR has no free employee slot left in its package."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Employee limit reached"


class PaymentProviderError(AssetVerseError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Payment provider error"
