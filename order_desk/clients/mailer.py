"""Mailer API client implementation."""

from typing import Optional

import httpx

from order_desk.clients import HTTP_ACCEPTED, build_client_args
from order_desk.common import logger
from order_desk.common.exceptions import DeliveryError
from order_desk.common.structures import NotificationMessage


class NotificationClient:
    """Client handing transactional emails to the external mailer service.

    The mailer only acknowledges acceptance; delivery happens later on its side.
    """

    def __init__(
        self, api_url: str, timeout: float = 10.0, proxy: Optional[str] = None
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.proxy = proxy

    @property
    def send_url(self) -> str:
        return f"{self.api_url}/mailer/send"

    def send(self, message: NotificationMessage) -> bool:
        """Submit a message to the mailer.

        Returns:
            True once the mailer accepted the message

        Raises:
            DeliveryError: If the mailer does not answer 202 or cannot be reached
        """
        try:
            with httpx.Client(**build_client_args(self.timeout, self.proxy)) as client:
                response = client.post(self.send_url, json=message.to_dict())
        except httpx.HTTPError as e:
            msg = f"Cannot reach mailer at {self.api_url}: {e}"
            raise DeliveryError(msg) from e

        if response.status_code != HTTP_ACCEPTED:
            msg = f"Mailer rejected message with status {response.status_code}: {response.text[:500]}"
            raise DeliveryError(msg)

        logger.info("Mailer accepted message for %s", message.recipient_address)
        return True
