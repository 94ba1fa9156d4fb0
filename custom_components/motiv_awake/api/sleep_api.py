"""API Handler for Sleep operations."""
from datetime import datetime

from ..models import parse_timestamp
from .base_api import MotivApiError, MotivBaseApi


# --- SLEEP API ---------------------------------------------------------------

class SleepApi(MotivBaseApi):
    """Handles sleep-related endpoints."""

    # --- GET LAST AWAKENING ---------------------------------------------------

    async def get_last_awakening(self, user_id: str) -> datetime:
        """Fetch the most recent wake timestamp for a user."""
        data = await self._request("GET", f"/users/{user_id}/sleep/latest")
        value = data.get("lastAwakening") if isinstance(data, dict) else None

        if value is None:
            raise MotivApiError(
                status=200,
                title="Invalid Response",
                detail="Response has no lastAwakening field.",
                code="INVALID_RESPONSE",
            )

        try:
            return parse_timestamp(value)
        except ValueError as err:
            raise MotivApiError(
                status=200,
                title="Invalid Response",
                detail=str(err),
                code="INVALID_RESPONSE",
            ) from err
