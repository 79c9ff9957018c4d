"""Main application module."""

import sys

import uvicorn

from order_desk.api import create_app
from order_desk.clients.directory import UserDirectoryClient
from order_desk.clients.mailer import NotificationClient
from order_desk.common import ORDER_DESK_VERSION, configure_logger, logger, utils
from order_desk.common.exceptions import ConfigurationError
from order_desk.common.structures import OrderDeskConfiguration
from order_desk.repository import InMemoryOrderRepository
from order_desk.service import OrderService


def build_service(configuration: OrderDeskConfiguration) -> OrderService:
    """Wire the real third-party clients and storage into an order service."""
    directory = UserDirectoryClient(
        configuration.directory_url,
        timeout=configuration.http_timeout_seconds,
        proxy=configuration.http_proxy,
    )
    notifier = NotificationClient(
        configuration.mailer_url,
        timeout=configuration.http_timeout_seconds,
        proxy=configuration.http_proxy,
    )
    return OrderService(directory, notifier, InMemoryOrderRepository(), configuration)


def main() -> None:
    """Entrypoint for the application."""
    try:
        configuration, cli_args = utils.init_configuration()
    except ConfigurationError:
        logger.exception("Failed to load configuration")
        sys.exit(1)
    configure_logger(configuration.log_level)
    logger.info("Order desk version: %s", ORDER_DESK_VERSION)

    app = create_app(build_service(configuration))
    logger.info("Listening on %s:%s", cli_args.host, cli_args.port)
    uvicorn.run(app, host=cli_args.host, port=cli_args.port, log_config=None)


if __name__ == "__main__":
    main()
