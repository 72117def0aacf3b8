"""Shared configuration record, list options and error types for the Resend helpers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


DEFAULT_BASE_URL = "https://api.resend.com"


@dataclass
class ResendConfig:
    """Configuration for talking to the Resend REST API."""
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30
    log_level: str = "INFO"
    json_logs: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)


class ResendError(Exception):
    """Base exception for Resend integration errors."""
    pass


class ValidationError(ResendError):
    """Raised when user supplied parameters are invalid for an item."""

    def __init__(self, message: str, item_index: int = 0):
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class TransportError(ResendError):
    """Raised when the HTTP transport fails or the API answers with an error."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status = status
        self.url = url


class ResendAuthError(TransportError):
    """Raised when authentication fails or no API key is available."""
    pass


class ResendNotFoundError(TransportError):
    """Raised when the requested resource does not exist."""
    pass


class ResendRateLimitError(TransportError):
    """Raised when rate limited by the API."""
    pass


class ResendConnectionError(TransportError):
    """Raised when unable to reach the API."""
    pass


@dataclass
class ListOptions:
    """Caller supplied cursor constraint for list endpoints."""
    after: Optional[str] = None
    before: Optional[str] = None

    def validate(self, item_index: int = 0) -> None:
        """
        Reject option combinations the API cannot serve.

        Raises:
            ValidationError: If both ``after`` and ``before`` are set
        """
        if self.after and self.before:
            raise ValidationError(
                'You can only use either "After" or "Before", not both.',
                item_index=item_index,
            )
