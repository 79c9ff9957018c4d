"""Exceptions raised by the order desk service and its clients."""

from typing import Any, Optional


class OrderDeskError(Exception):
    """Base exception for order desk errors."""


class ConfigurationError(OrderDeskError):
    """Service configuration is incorrect."""


class InvalidOrderError(OrderDeskError):
    """Order request is malformed."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None) -> None:
        """Initialize exception with message and optional validation details.

        Args:
            message: Human-readable description of the problem
            errors: Field-level validation errors, as reported by pydantic
        """
        super().__init__(message)
        self.errors = errors or []


class UserNotFoundError(OrderDeskError):
    """The user referenced by an order does not exist in the directory."""

    def __init__(self, user_id: int, message: str = "", code: Optional[str] = None) -> None:
        """Initialize exception with the missing user id and directory details.

        Args:
            user_id: Identifier that the directory failed to resolve
            message: Message reported by the directory, if any
            code: Error code reported by the directory, if any
        """
        super().__init__(message or f"User {user_id} does not exist")
        self.user_id = user_id
        self.code = code


class OrderNotFoundError(OrderDeskError):
    """Requested order does not exist."""


class DirectoryUnavailableError(OrderDeskError):
    """User directory failed to answer or answered unexpectedly."""


class UpstreamUnavailableError(OrderDeskError):
    """A dependency required to complete the request is unavailable."""


class DeliveryError(OrderDeskError):
    """Mailer did not accept the notification."""
