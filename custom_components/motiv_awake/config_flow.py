"""Config flow for Motiv Awake integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries # type: ignore
from homeassistant.data_entry_flow import FlowResult # type: ignore
from homeassistant.helpers.aiohttp_client import async_get_clientsession # type: ignore
from homeassistant.util import dt as dt_util # type: ignore

from .api.base_api import MotivApiError, MotivNetworkError
from .api.client import MotivApiClient
from .const import (
    CONF_ACCOUNT,
    CONF_EMAIL,
    CONF_SESSION_EXPIRY,
    CONF_SESSION_TOKEN,
    CONF_USER_ID,
    DOMAIN,
)
from .exceptions import MissingConfigError, SessionExpiredError
from .session import check_session

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_EMAIL): str,
        vol.Required(CONF_USER_ID): str,
        vol.Required(CONF_SESSION_TOKEN): str,
        vol.Required(CONF_SESSION_EXPIRY): str,
    }
)


class MotivConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Motiv Awake."""

    VERSION = 1


    # --- STEP USER ------------------------------------------------------------

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the session material produced by motiv-cli."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                account = check_session({CONF_ACCOUNT: user_input}, dt_util.utcnow())
            except MissingConfigError:
                errors["base"] = "invalid_auth"
            except SessionExpiredError:
                errors[CONF_SESSION_EXPIRY] = "session_expired"
            else:
                await self.async_set_unique_id(account.user_id)
                self._abort_if_unique_id_configured()

                client = MotivApiClient(async_get_clientsession(self.hass), account)
                try:
                    if await client.async_validate_auth():
                        return self.async_create_entry(
                            title=account.email or account.user_id,
                            data={CONF_ACCOUNT: account.as_config()},
                        )
                    errors["base"] = "invalid_auth"
                except MotivNetworkError:
                    errors["base"] = "cannot_connect"
                except MotivApiError:
                    _LOGGER.exception("Unexpected response while validating the session")
                    errors["base"] = "unknown"

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )
