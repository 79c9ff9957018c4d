"""Tests for configuration loading functions."""

import tempfile
from pathlib import Path
from unittest import mock

import pytest
import yaml

from order_desk.common.exceptions import ConfigurationError
from order_desk.common.utils import (
    environment_overrides,
    init_configuration,
    load_configuration,
)


def write_config(data) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(data, f)
        return f.name


class TestConfigurationLoading:
    """Test cases for configuration loading utilities."""

    def test_load_configuration_from_file(self):
        config_file_path = write_config(
            {
                "directory_url": "http://directory.local/",
                "mailer_url": "http://mailer.local",
                "send_notifications": True,
                "http_timeout_seconds": 3,
            }
        )
        try:
            configuration = load_configuration(config_file_path, environ={})

            assert configuration.directory_url == "http://directory.local"
            assert configuration.mailer_url == "http://mailer.local"
            assert configuration.send_notifications is True
            assert configuration.http_timeout_seconds == 3.0
            assert configuration.config_file_path == config_file_path
        finally:
            Path(config_file_path).unlink()

    def test_environment_overrides_file_values(self):
        config_file_path = write_config({"send_notifications": False, "mailer_url": "http://a"})
        try:
            configuration = load_configuration(
                config_file_path,
                environ={"SEND_MAILS": "true", "ORDER_DESK_MAILER_URL": "http://b"},
            )

            assert configuration.send_notifications is True
            assert configuration.mailer_url == "http://b"
        finally:
            Path(config_file_path).unlink()

    def test_defaults_without_file(self):
        configuration = load_configuration(None, environ={})

        assert configuration.directory_url == "http://localhost"
        assert configuration.send_notifications is False
        assert configuration.config_file_path is None

    def test_empty_file_uses_defaults(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            config_file_path = f.name
        try:
            configuration = load_configuration(config_file_path, environ={})
            assert configuration.mailer_url == "http://localhost"
        finally:
            Path(config_file_path).unlink()

    def test_missing_file(self):
        with pytest.raises(ConfigurationError, match="not found"):
            load_configuration("/nonexistent/order-desk.yaml", environ={})

    def test_invalid_values(self):
        config_file_path = write_config({"http_timeout_seconds": -1})
        try:
            with pytest.raises(ConfigurationError, match="Invalid configuration"):
                load_configuration(config_file_path, environ={})
        finally:
            Path(config_file_path).unlink()

    def test_non_mapping_file(self):
        config_file_path = write_config(["a", "b"])
        try:
            with pytest.raises(ConfigurationError, match="must contain a mapping"):
                load_configuration(config_file_path, environ={})
        finally:
            Path(config_file_path).unlink()

    def test_load_configuration_with_sentry(self):
        config_file_path = write_config({"sentry_dsn": "https://key@sentry.example.com/1"})
        try:
            with mock.patch("order_desk.common.utils.init_sentry") as init_sentry_mock:
                configuration = load_configuration(config_file_path, environ={})

            init_sentry_mock.assert_called_once_with("https://key@sentry.example.com/1")
            assert configuration.sentry_dsn == "https://key@sentry.example.com/1"
        finally:
            Path(config_file_path).unlink()


class TestEnvironmentOverrides:
    @pytest.mark.parametrize("value", ["true", "TRUE", "yes", "1"])
    def test_truthy_send_mails(self, value):
        assert environment_overrides({"SEND_MAILS": value}) == {"send_notifications": True}

    @pytest.mark.parametrize("value", ["false", "no", "0", ""])
    def test_falsy_send_mails(self, value):
        assert environment_overrides({"SEND_MAILS": value}) == {"send_notifications": False}

    def test_ignores_unrelated_variables(self):
        assert environment_overrides({"HOME": "/root"}) == {}


class TestInitConfiguration:
    def test_cli_arguments(self):
        config_file_path = write_config({"log_level": "INFO"})
        try:
            configuration, cli_args = init_configuration(
                ["-c", config_file_path, "--port", "9000", "--log-level", "DEBUG"]
            )

            assert configuration.log_level == "DEBUG"
            assert configuration.config_file_path == config_file_path
            assert cli_args.port == 9000
            assert cli_args.host == "127.0.0.1"
        finally:
            Path(config_file_path).unlink()
