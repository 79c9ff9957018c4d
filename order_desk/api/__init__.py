"""HTTP API of the order desk service."""

from order_desk.api.main import create_app

__all__ = ["create_app"]
