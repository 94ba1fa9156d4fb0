"""Initialization of the Motiv Awake integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.const import Platform  # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.helpers.aiohttp_client import async_get_clientsession # type: ignore

from .api.client import MotivApiClient
from .const import DOMAIN
from .host import HomeAssistantHost
from .models import MotivAccount
from .platform import MotivPlatform, PlatformContext


_LOGGER = logging.getLogger(__name__)

# Supported platforms
PLATFORMS: list[Platform] = [
    Platform.BINARY_SENSOR,
]


# --- SETUP ENTRY -------------------------------------------------------------

async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Motiv Awake from a config entry."""
    session = async_get_clientsession(hass)

    def _client_factory(account: MotivAccount) -> MotivApiClient:
        return MotivApiClient(session, account)

    # The session check runs once the binary_sensor platform signals launch
    host = HomeAssistantHost(hass, entry)
    platform = MotivPlatform(
        PlatformContext(logger=_LOGGER, host=host, client_factory=_client_factory),
        entry.data,
    )

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "host": host,
        "platform": platform,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


# --- UNLOAD ENTRY ------------------------------------------------------------

async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Handle unloading of the integration."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id, None)
    return unload_ok
