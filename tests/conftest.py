"""Common test fixtures for the order desk service."""

import pytest
from fastapi.testclient import TestClient

from order_desk.api import create_app
from order_desk.repository import InMemoryOrderRepository
from order_desk.service import OrderService
from order_desk.testing import FakeUserDirectory, RecordingNotificationClient
from tests.fixtures import JANE, JOHN, make_configuration


@pytest.fixture
def configuration():
    """Configuration with notifications disabled."""
    return make_configuration()


@pytest.fixture
def directory():
    """Directory knowing John (no email) and Jane (with email)."""
    return FakeUserDirectory([JOHN, JANE])


@pytest.fixture
def notifier():
    return RecordingNotificationClient()


@pytest.fixture
def repository():
    return InMemoryOrderRepository()


@pytest.fixture
def service(directory, notifier, repository, configuration):
    """Order service wired to fakes."""
    return OrderService(directory, notifier, repository, configuration)


@pytest.fixture
def client(service):
    """API client for the service wired to fakes."""
    with TestClient(create_app(service)) as test_client:
        yield test_client
