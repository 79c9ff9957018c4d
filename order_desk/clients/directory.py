"""User directory API client implementation."""

from typing import Optional

import httpx
from pydantic import ValidationError

from order_desk.clients import HTTP_NOT_FOUND, HTTP_OK, build_client_args
from order_desk.common import logger
from order_desk.common.exceptions import DirectoryUnavailableError, UserNotFoundError
from order_desk.common.structures import User


class UserDirectoryClient:
    """Client resolving user identifiers through the external directory service."""

    def __init__(
        self, api_url: str, timeout: float = 10.0, proxy: Optional[str] = None
    ) -> None:
        """Initialize directory client.

        Args:
            api_url: Base URL of the directory service
            timeout: Timeout in seconds for every request
            proxy: Optional proxy URL
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.proxy = proxy

    def user_url(self, user_id: int) -> str:
        """Return the lookup URL for a user."""
        return f"{self.api_url}/user/{user_id}"

    def fetch_user(self, user_id: int) -> User:
        """Fetch a user record by identifier.

        Args:
            user_id: Identifier of the user to resolve

        Returns:
            The user returned by the directory

        Raises:
            UserNotFoundError: If the directory answers 404
            DirectoryUnavailableError: On any other status, a malformed body,
                a connection error or a timeout
        """
        url = self.user_url(user_id)
        logger.debug("Fetching user %s from %s", user_id, url)

        try:
            with httpx.Client(**build_client_args(self.timeout, self.proxy)) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            logger.warning("User directory request failed: %s", e)
            msg = f"Cannot reach user directory at {self.api_url}: {e}"
            raise DirectoryUnavailableError(msg) from e

        if response.status_code == HTTP_NOT_FOUND:
            details = _error_details(response)
            logger.info("User %s not found in directory: %s", user_id, details)
            raise UserNotFoundError(
                user_id, message=details.get("message", ""), code=details.get("code")
            )

        if response.status_code != HTTP_OK:
            msg = (
                f"User directory answered {response.status_code} for user {user_id}: "
                f"{response.text[:500]}"
            )
            logger.warning(msg)
            raise DirectoryUnavailableError(msg)

        try:
            return User.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"Invalid user payload from directory for user {user_id}: {e}"
            raise DirectoryUnavailableError(msg) from e

    def ping(self) -> bool:
        """Check if the user directory is reachable.

        Returns:
            True if the directory answered, False otherwise
        """
        try:
            with httpx.Client(**build_client_args(self.timeout, self.proxy)) as client:
                client.get(self.api_url)
            return True
        except httpx.HTTPError:
            logger.exception("User directory ping failed")
            return False


def _error_details(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
