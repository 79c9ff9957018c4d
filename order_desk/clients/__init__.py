"""HTTP clients for the third-party services used by the order desk."""

from typing import Any, Optional

HTTP_OK = 200
HTTP_ACCEPTED = 202
HTTP_NOT_FOUND = 404


def build_client_args(timeout: float, proxy: Optional[str] = None) -> dict[str, Any]:
    """Build keyword arguments for ``httpx.Client``.

    Args:
        timeout: Timeout in seconds applied to connect, read and write
        proxy: Optional proxy URL (e.g. "socks5://localhost:12345")
    """
    client_args: dict[str, Any] = {"timeout": timeout}
    if proxy:
        client_args["proxy"] = proxy
    return client_args
