"""Main API Client for Motiv."""
from datetime import datetime

import aiohttp

from homeassistant.util import dt as dt_util  # type: ignore

from ..const import DEFAULT_API_URL
from ..models import MotivAccount
from .base_api import MotivAuthError
from .sleep_api import SleepApi
from .user_api import UserApi


class MotivApiClient:
    """
    Main container for Motiv API sub-clients.
    Every call goes to the backend; nothing is cached or retried.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        account: MotivAccount,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        """Initialize the client and its sub-components."""
        self.account = account
        self.user = UserApi(session, api_url, account.session_token)
        self.sleep = SleepApi(session, api_url, account.session_token)


    # --- AUTH STATE ----------------------------------------------------------

    @property
    def needs_auth(self) -> bool:
        """Return True until a usable, unexpired session is loaded."""
        if not self.account.user_id or not self.account.session_token:
            return True
        return self.account.is_expired(dt_util.utcnow())


    # --- VALIDATE AUTH -------------------------------------------------------

    async def async_validate_auth(self) -> bool:
        """Helper to validate the session using the User API."""
        try:
            data = await self.user.get_me()
        except MotivAuthError:
            return False
        return data is not None


    # --- LAST AWAKENING ------------------------------------------------------

    async def get_last_awakening(self) -> datetime:
        """Fetch the most recent wake timestamp of the account owner."""
        if not self.account.user_id:
            raise MotivAuthError(
                status=0,
                title="Unauthenticated",
                detail="No Motiv user id is configured.",
                code="AUTH_ERROR",
            )
        return await self.sleep.get_last_awakening(self.account.user_id)
