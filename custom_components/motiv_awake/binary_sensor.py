"""Support for Motiv Awake binary sensors."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homeassistant.components.binary_sensor import ( # type: ignore
    BinarySensorEntity,
    BinarySensorDeviceClass,
)
from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.helpers.device_registry import DeviceInfo # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback # type: ignore

from .const import DOMAIN, SCAN_INTERVAL  # noqa: F401
from .exceptions import ReadFailure
from .platform import Accessory

if TYPE_CHECKING:
    from .host import HomeAssistantHost
    from .platform import MotivPlatform

_LOGGER = logging.getLogger(__name__)


# --- SETUP ENTRY -------------------------------------------------------------

async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Restore cached sensors and let the platform synchronize them."""
    data = hass.data[DOMAIN][entry.entry_id]
    host: HomeAssistantHost = data["host"]
    platform: MotivPlatform = data["platform"]

    host.async_start(async_add_entities, platform.configure_accessory)


# --- MOTIV AWAKE SENSOR ------------------------------------------------------

class MotivAwakeSensor(BinarySensorEntity):
    """Occupancy sensor that is on while the account owner is awake."""

    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.OCCUPANCY
    _attr_should_poll = True

    def __init__(self, accessory: Accessory) -> None:
        self._accessory = accessory
        self._attr_unique_id = accessory.uuid
        self._attr_name = accessory.display_name
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, accessory.uuid)},
            name="Motiv",
            manufacturer=accessory.manufacturer,
            model=accessory.model,
            serial_number=accessory.serial_number,
        )

    @property
    def accessory(self) -> Accessory:
        return self._accessory

    async def async_update(self) -> None:
        """Ask the platform for a fresh reading."""
        try:
            self._attr_is_on = await self._accessory.async_read()
        except ReadFailure as err:
            if self._attr_available:
                _LOGGER.warning("%s is not responding: %s", self._accessory.display_name, err)
            self._attr_available = False
            return
        except Exception:  # pylint: disable=broad-except
            _LOGGER.exception("Unexpected error reading %s", self._accessory.display_name)
            self._attr_available = False
            return

        self._attr_available = True
