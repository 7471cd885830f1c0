"""API client for the todo service."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from todolist.config import Config, get_config_manager
from todolist.exceptions import NetworkError
from todolist.utils.logger import get_logger


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the server's ``message`` field."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"Request failed with status {response.status_code}"


class APIClient:
    """HTTP client for the todo API.

    Requests are sent once; there are no retries.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if config is None:
            config = get_config_manager().config
        self.config = config
        self.base_url = config.api.endpoint.rstrip("/")
        self.timeout = config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API.

        Raises:
            NetworkError: On transport failure or a non-success status
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        logger = get_logger()

        try:
            response = await client.request(method=method, url=url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning("%s %s -> %s: %s", method, url, e.response.status_code, message)
            raise NetworkError(message, response_status=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(f"Could not reach {self.base_url}: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    async def get(self, path: str) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, *, json: Optional[Any] = None) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Optional[Any] = None) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, *, json: Optional[Any] = None) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client(profile: str = "default") -> APIClient:
    """Get an API client configured from a profile."""
    return APIClient(get_config_manager(profile).config)
