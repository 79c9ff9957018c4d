"""Configuration helpers for the order desk service.

This module provides:
- Configuration loading from YAML files
- Environment variable overrides applied on top of the file
- Command-line parsing for the service entry point
- Optional Sentry initialization
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from order_desk.common import logger
from order_desk.common.exceptions import ConfigurationError
from order_desk.common.structures import OrderDeskConfiguration

TRUE_VALUES = ("true", "yes", "1")

# Environment variable -> configuration field
ENV_OVERRIDES = {
    "ORDER_DESK_DIRECTORY_URL": "directory_url",
    "ORDER_DESK_MAILER_URL": "mailer_url",
    "SEND_MAILS": "send_notifications",
    "ORDER_DESK_STORE_MANAGER_EMAIL": "store_manager_email",
    "ORDER_DESK_HTTP_TIMEOUT": "http_timeout_seconds",
    "ORDER_DESK_HTTP_PROXY": "http_proxy",
    "ORDER_DESK_LOG_LEVEL": "log_level",
}


def env_flag(value: str) -> bool:
    """Interpret an environment variable value as a boolean."""
    return value.strip().lower() in TRUE_VALUES


def environment_overrides(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Collect configuration values set through environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``

    Returns:
        Dictionary of configuration field names to raw values
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None:
            continue
        if field_name == "send_notifications":
            overrides[field_name] = env_flag(value)
        else:
            overrides[field_name] = value
    return overrides


def load_configuration(
    config_file_path: Optional[str] = None, environ: Optional[dict[str, str]] = None
) -> OrderDeskConfiguration:
    """Load configuration from a YAML file and the environment.

    Environment variables take precedence over values from the file.

    Args:
        config_file_path: Path to the YAML configuration file; when None only
            defaults and environment variables are used
        environ: Mapping used for overrides; defaults to ``os.environ``

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If the file is missing, malformed or holds invalid values
    """
    data: dict[str, Any] = {}
    if config_file_path is not None:
        path = Path(config_file_path)
        if not path.exists():
            msg = f"Configuration file not found: {config_file_path}"
            raise ConfigurationError(msg)
        try:
            with path.open(encoding="UTF-8") as stream:
                data = yaml.safe_load(stream) or {}
        except yaml.YAMLError as e:
            msg = f"Unable to parse configuration file {config_file_path}: {e}"
            raise ConfigurationError(msg) from e
        if not isinstance(data, dict):
            msg = f"Configuration file {config_file_path} must contain a mapping"
            raise ConfigurationError(msg)

    data.update(environment_overrides(environ))
    data["config_file_path"] = config_file_path

    try:
        configuration = OrderDeskConfiguration.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigurationError(msg) from e

    if configuration.sentry_dsn:
        init_sentry(configuration.sentry_dsn)

    logger.info("Directory URL: %s", configuration.directory_url)
    logger.info("Mailer URL: %s", configuration.mailer_url)
    logger.info("Notifications enabled: %s", configuration.send_notifications)
    return configuration


def init_sentry(sentry_dsn: str) -> None:
    """Initialize Sentry error reporting."""
    import sentry_sdk  # noqa: PLC0415

    sentry_sdk.init(dsn=sentry_dsn)
    logger.info("Sentry reporting is enabled")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the service entry point."""
    parser = argparse.ArgumentParser(description="Order desk HTTP service")

    parser.add_argument(
        "--config-file",
        "-c",
        help="Path to the config file; default is order-desk-config.yaml "
        "when present, otherwise defaults and environment variables are used",
        dest="config_file_path",
        default=None,
        required=False,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument(
        "--log-level",
        help="Logging level overriding the configuration",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    return parser


def init_configuration(
    argv: Optional[list[str]] = None,
) -> tuple[OrderDeskConfiguration, argparse.Namespace]:
    """Initialize service configuration from CLI arguments and config file.

    Returns:
        Configuration and the parsed command-line arguments

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    cli_args = create_parser().parse_args(argv)
    config_file_path = cli_args.config_file_path
    if config_file_path is None and Path("order-desk-config.yaml").exists():
        config_file_path = "order-desk-config.yaml"

    logger.info("Using %s as a config source", config_file_path or "environment")
    configuration = load_configuration(config_file_path)
    if cli_args.log_level:
        configuration.log_level = cli_args.log_level
    return configuration, cli_args
