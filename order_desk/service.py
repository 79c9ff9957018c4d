"""Order creation workflow.

An order goes through the following states:

    Received -> Validated -> UserResolved -> Persisted
        -> NotificationAttempted | NotificationSkipped -> Completed

Validation and user resolution failures reject the order before anything is
persisted. Notification failures are logged and never fail the order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, Union

from pydantic import ValidationError

from order_desk.common import logger
from order_desk.common.exceptions import (
    DeliveryError,
    DirectoryUnavailableError,
    InvalidOrderError,
    OrderNotFoundError,
    UpstreamUnavailableError,
)
from order_desk.common.structures import (
    NotificationMessage,
    Order,
    OrderDeskConfiguration,
    OrderRequest,
    User,
)
from order_desk.repository import OrderRepository

# Callable deferring work, e.g. ``BackgroundTasks.add_task``
Scheduler = Callable[..., Any]


class UserDirectory(Protocol):
    """Anything able to resolve a user id."""

    def fetch_user(self, user_id: int) -> User: ...

    def ping(self) -> bool: ...


class Notifier(Protocol):
    """Anything able to hand a notification to a mailer."""

    def send(self, message: NotificationMessage) -> bool: ...


class OrderService:
    """Creates orders for users known to the directory."""

    def __init__(
        self,
        directory: UserDirectory,
        notifier: Notifier,
        repository: OrderRepository,
        configuration: OrderDeskConfiguration,
    ) -> None:
        """Initialize the service with its collaborators.

        Args:
            directory: Client used to resolve users
            notifier: Client used to send order notifications
            repository: Storage for persisted orders
            configuration: Service configuration; ``send_notifications`` is
                read on every call so changes apply to the next order
        """
        self.directory = directory
        self.notifier = notifier
        self.repository = repository
        self.configuration = configuration

    def create_order(
        self,
        payload: Union[Mapping[str, Any], OrderRequest],
        schedule: Optional[Scheduler] = None,
    ) -> Order:
        """Validate, persist and optionally announce a new order.

        Args:
            payload: Raw request body or an already built order request
            schedule: Optional callable deferring the notification,
                called as ``schedule(func, *args)``; the notification runs
                inline when omitted

        Returns:
            The persisted order

        Raises:
            InvalidOrderError: If the payload is malformed
            UserNotFoundError: If the referenced user does not exist
            UpstreamUnavailableError: If the directory cannot be queried
        """
        order_request = self.validate(payload)
        logger.info(
            "Validated order request for user %s, product %s (%s)",
            order_request.user_id,
            order_request.product_id,
            order_request.mode.value,
        )

        try:
            user = self.directory.fetch_user(order_request.user_id)
        except DirectoryUnavailableError as e:
            logger.error("Rejecting order for user %s: %s", order_request.user_id, e)
            raise UpstreamUnavailableError(str(e)) from e
        logger.info("Resolved user %s (%s)", user.id, user.name)

        order = self.repository.save(order_request)
        logger.info("Persisted order %s", order.id)

        if not self.configuration.send_notifications:
            logger.info("Notifications are disabled, skipping notification for order %s", order.id)
            return order

        message = self.build_notification(order, user)
        if message is None:
            return order

        if schedule is not None:
            logger.debug("Scheduling notification for order %s", order.id)
            schedule(self.notify, order.id, message)
        else:
            self.notify(order.id, message)
        return order

    def validate(self, payload: Union[Mapping[str, Any], OrderRequest]) -> OrderRequest:
        """Build an order request from a raw payload.

        Raises:
            InvalidOrderError: If the payload is not a mapping or fails validation
        """
        if isinstance(payload, OrderRequest):
            return payload
        if not isinstance(payload, Mapping):
            msg = "Order request must be a JSON object"
            raise InvalidOrderError(msg)
        try:
            return OrderRequest.model_validate(dict(payload))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            logger.info("Rejecting invalid order request: %s", errors)
            raise InvalidOrderError("Invalid order request", errors=errors) from e

    def build_notification(self, order: Order, user: User) -> Optional[NotificationMessage]:
        """Build the message announcing a new order.

        The message goes to the user's email when the directory knows it,
        otherwise to the configured store manager address.

        Returns:
            The message, or None if no valid recipient address is available
        """
        recipient = user.email or self.configuration.store_manager_email
        try:
            return NotificationMessage(
                subject=f"New order #{order.id}",
                body=(
                    f"{user.name} placed order #{order.id} for product {order.product_id} "
                    f"in {order.mode.value} mode."
                ),
                recipient_address=recipient,
            )
        except ValidationError:
            logger.exception("Unable to build notification for order %s", order.id)
            return None

    def notify(self, order_id: int, message: NotificationMessage) -> bool:
        """Send an order notification, logging the outcome.

        Returns:
            True if the mailer accepted the message, False otherwise
        """
        logger.info("Sending notification for order %s", order_id)
        try:
            self.notifier.send(message)
        except DeliveryError as e:
            logger.warning("Notification for order %s was not delivered: %s", order_id, e)
            return False
        logger.info("Notification for order %s accepted", order_id)
        return True

    def get_order(self, order_id: int) -> Order:
        """Get a persisted order.

        Raises:
            OrderNotFoundError: If no order has this id
        """
        order = self.repository.get(order_id)
        if order is None:
            msg = f"Order {order_id} does not exist"
            raise OrderNotFoundError(msg)
        return order

    def list_orders(self) -> list[Order]:
        return self.repository.list_orders()
