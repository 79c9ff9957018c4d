"""Common structures and data classes for the order desk service.

This module defines the core data structures used throughout the service:
- Order requests and persisted orders exchanged over the HTTP API
- The user record read from the external directory
- The notification payload posted to the external mailer
- The service configuration loaded from YAML and the environment

Wire payloads use camelCase keys (``userId``, ``recipientAddress``) while
Python code works with snake_case attributes; every model accepts both.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMAIL_REGEX = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")


class OrderMode(str, Enum):
    """Allowed order modes."""

    DRAFT = "draft"
    APPROVED = "approved"


class WireModel(BaseModel):
    """Base model for payloads serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary with wire (camelCase) keys."""
        return self.model_dump(by_alias=True, mode="json")


class OrderRequest(WireModel):
    """Incoming request to create an order."""

    model_config = ConfigDict(frozen=True)

    user_id: int = Field(..., strict=True, gt=0, description="Id of the ordering user")
    product_id: int = Field(..., strict=True, gt=0, description="Id of the ordered product")
    mode: OrderMode = Field(..., description="Order mode, draft or approved")


class Order(OrderRequest):
    """Persisted order, immutable once saved."""

    id: int = Field(..., description="Identifier generated by the repository")
    created_at: datetime = Field(..., description="Time the order was persisted (UTC)")


class User(WireModel):
    """User record owned by the external directory service."""

    id: int
    name: str
    email: Optional[str] = Field(default=None, description="Contact address, when known")


class NotificationMessage(WireModel):
    """Transactional email payload accepted by the mailer service."""

    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    recipient_address: str

    @field_validator("recipient_address")
    @classmethod
    def validate_recipient_address(cls, value: str) -> str:
        """Reject addresses that are not syntactically valid emails."""
        if not EMAIL_REGEX.match(value):
            msg = f"Invalid recipient address: {value!r}"
            raise ValueError(msg)
        return value


class OrderDeskConfiguration(BaseModel):
    """Configuration of the order desk service.

    Attributes:
        directory_url: Base URL of the user directory service
        mailer_url: Base URL of the mailer service
        send_notifications: Feature flag enabling order notifications
        store_manager_email: Recipient used when the user has no email
        http_timeout_seconds: Timeout applied to every outbound request
        http_proxy: Optional proxy URL for outbound requests
        log_level: Logging level name
        sentry_dsn: Optional Sentry DSN; Sentry is initialized when set
        config_file_path: Path of the YAML file the configuration came from
    """

    directory_url: str = Field(default="http://localhost", min_length=1)
    mailer_url: str = Field(default="http://localhost", min_length=1)
    send_notifications: bool = False
    store_manager_email: str = "store-manager@example.com"
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    http_proxy: Optional[str] = None
    log_level: str = "INFO"
    sentry_dsn: Optional[str] = None
    config_file_path: Optional[str] = None

    @field_validator("directory_url", "mailer_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize base URLs so that paths can be appended."""
        return value.rstrip("/")
