"""API Handler for User operations."""
from typing import Any
from .base_api import MotivBaseApi

class UserApi(MotivBaseApi):
    """Handles user-related endpoints."""


    # --- GET ME ----------------------------------------------------------------

    async def get_me(self) -> dict[str, Any] | None:
        """Fetch the profile of the session owner."""
        return await self._request("GET", "/users/me")
