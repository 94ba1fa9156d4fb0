"""Home Assistant implementation of the accessory host."""
from __future__ import annotations

import logging
import uuid
from typing import Callable

from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.const import Platform # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.helpers import entity_registry as er # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback # type: ignore

from .binary_sensor import MotivAwakeSensor
from .const import DOMAIN, EVENT_DID_FINISH_LAUNCHING
from .platform import Accessory

_LOGGER = logging.getLogger(__name__)

_UUID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, DOMAIN)


# --- HOME ASSISTANT HOST -----------------------------------------------------

class HomeAssistantHost:
    """
    Exposes platform accessories as binary sensor entities.
    The entity registry plays the part of the accessory cache.
    """

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        self.hass = hass
        self.entry = entry
        self._listeners: dict[str, list[Callable[[], None]]] = {}
        self._add_entities: AddEntitiesCallback | None = None
        self._entities: dict[str, MotivAwakeSensor] = {}


    # --- EVENTS ---------------------------------------------------------------

    def on(self, event: str, callback: Callable[[], None]) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def emit(self, event: str) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback()


    # --- START ----------------------------------------------------------------

    def async_start(
        self,
        async_add_entities: AddEntitiesCallback,
        configure_accessory: Callable[[Accessory], None],
    ) -> None:
        """Restore cached accessories, then signal that launching finished."""
        self._add_entities = async_add_entities

        ent_reg = er.async_get(self.hass)
        for reg_entry in er.async_entries_for_config_entry(ent_reg, self.entry.entry_id):
            if reg_entry.domain != Platform.BINARY_SENSOR:
                continue
            configure_accessory(
                Accessory(
                    display_name=reg_entry.original_name or reg_entry.unique_id,
                    uuid=reg_entry.unique_id,
                    context={"entity_id": reg_entry.entity_id},
                )
            )

        self.emit(EVENT_DID_FINISH_LAUNCHING)


    # --- ACCESSORIES ----------------------------------------------------------

    def generate_uuid(self, name: str) -> str:
        return str(uuid.uuid5(_UUID_NAMESPACE, name))

    def create_accessory(self, display_name: str, uuid: str) -> Accessory:
        return Accessory(display_name=display_name, uuid=uuid)

    def register_platform_accessories(
        self, package_name: str, plugin_name: str, accessories: list[Accessory]
    ) -> None:
        _LOGGER.debug("Registering %d accessories for %s (%s)", len(accessories), plugin_name, package_name)
        self._publish(accessories)

    def update_platform_accessories(self, accessories: list[Accessory]) -> None:
        self._publish(accessories)

    def unregister_platform_accessories(
        self, package_name: str, plugin_name: str, accessories: list[Accessory]
    ) -> None:
        ent_reg = er.async_get(self.hass)
        for accessory in accessories:
            self._entities.pop(accessory.uuid, None)
            entity_id = ent_reg.async_get_entity_id(Platform.BINARY_SENSOR, DOMAIN, accessory.uuid)
            if entity_id:
                _LOGGER.debug("Removing entity %s for %s", entity_id, plugin_name)
                ent_reg.async_remove(entity_id)

    def _publish(self, accessories: list[Accessory]) -> None:
        """Add an entity for each accessory that has none yet."""
        if self._add_entities is None:
            raise RuntimeError("The binary_sensor platform is not set up")

        new_entities = []
        for accessory in accessories:
            if accessory.uuid in self._entities:
                continue
            entity = MotivAwakeSensor(accessory)
            self._entities[accessory.uuid] = entity
            new_entities.append(entity)

        if new_entities:
            self._add_entities(new_entities, True)
