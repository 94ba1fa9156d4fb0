"""Base class for Motiv API sub-clients."""
import asyncio
import logging
from typing import Any, Optional

import aiohttp

from ..const import REQUEST_TIMEOUT

_LOGGER = logging.getLogger(__name__)


# --- MOTIV API ERRORS --------------------------------------------------------

class MotivApiError(Exception):
    """
    Exception raised for backend API errors.
    Carries the HTTP status and the backend error code when available.
    """
    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        code: Optional[str] = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.code = code

        msg = f"[{status}] {title}: {detail}"
        if code:
            msg += f" (Code: {code})"

        super().__init__(msg)


class MotivNetworkError(MotivApiError):
    """The Motiv API could not be reached."""


class MotivAuthError(MotivApiError):
    """The Motiv API rejected the session."""


# --- MOTIV BASE API ----------------------------------------------------------

class MotivBaseApi:
    """Base class handling HTTP requests and authentication."""

    def __init__(self, session: aiohttp.ClientSession, api_url: str, session_token: str | None) -> None:
        """Initialize the base API."""
        self._session = session
        self._api_url = api_url.rstrip("/")
        self._session_token = session_token


    # --- REQUEST ---------------------------------------------------------------

    async def _request(self, method: str, endpoint: str, data: dict | None = None) -> Any:
        """Execute an HTTP request and map failures to API errors."""
        url = f"{self._api_url}{endpoint}"
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._session_token:
            headers["Authorization"] = f"Bearer {self._session_token}"

        try:
            async with self._session.request(
                method,
                url,
                headers=headers,
                json=data,
                timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT),
            ) as response:

                if response.status in (401, 403):
                    raise MotivAuthError(
                        status=response.status,
                        title="Unauthenticated",
                        detail="The Motiv session was rejected.",
                        code="AUTH_ERROR",
                    )

                if response.status >= 400:
                    title = f"HTTP Error {response.status}"
                    code = "HTTP_ERROR"
                    content_type = response.headers.get("Content-Type", "")

                    if "json" in content_type:
                        try:
                            body = await response.json()
                        except ValueError:
                            body = {}
                        if not isinstance(body, dict):
                            body = {}
                        detail = body.get("detail") or body.get("message") or "Unknown error occurred."
                        code = body.get("code") or code
                    else:
                        text = await response.text()
                        detail = text[:200] + "..." if len(text) > 200 else text

                    raise MotivApiError(response.status, title, detail, code)

                if response.status == 204:
                    return None

                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as err:
                    raise MotivApiError(
                        status=response.status,
                        title="Invalid Response",
                        detail=f"Server returned non-JSON response: {err}",
                        code="INVALID_RESPONSE",
                    ) from err

        except asyncio.TimeoutError as err:
            _LOGGER.error("Motiv request timed out: %s %s", method, endpoint)
            raise MotivNetworkError(
                status=0,
                title="Timeout",
                detail=f"No response from server after {REQUEST_TIMEOUT}s",
                code="TIMEOUT",
            ) from err

        except aiohttp.ClientError as err:
            _LOGGER.error("Motiv Connection Error: %s", err)
            raise MotivNetworkError(
                status=0,
                title="Connection Error",
                detail=f"Cannot connect to server: {err}",
                code="CONNECTION_ERROR",
            ) from err
