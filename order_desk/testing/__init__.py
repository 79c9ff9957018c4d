"""Testing toolkit for the order desk service.

This module provides tools for testing the service in isolation from its
third-party dependencies. It supports:

- In-process fakes of the user directory and the mailer, injected at construction
- Interception of the real HTTP clients, refusing any unmocked outbound call
- A running service instance scoped to a ``with`` block, always torn down
"""

from order_desk.testing.fakes import FakeUserDirectory, RecordingNotificationClient
from order_desk.testing.interception import ThirdPartyMocks, mock_third_parties
from order_desk.testing.server import running_service

__all__ = [
    "FakeUserDirectory",
    "RecordingNotificationClient",
    "ThirdPartyMocks",
    "mock_third_parties",
    "running_service",
]
