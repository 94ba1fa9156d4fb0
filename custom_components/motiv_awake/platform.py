"""Accessory synchronization for the Motiv Awake platform."""
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterable, Mapping, Protocol

from homeassistant.util import dt as dt_util  # type: ignore

from .api.base_api import MotivApiError
from .const import (
    EVENT_DID_FINISH_LAUNCHING,
    MANUFACTURER,
    PACKAGE_NAME,
    PLUGIN_NAME,
    RENEW_HINT,
    SENSOR_TYPES,
)
from .exceptions import (
    AuthNotReadyError,
    MissingConfigError,
    ReadFailure,
    SessionExpiredError,
)
from .models import MotivAccount
from .session import check_session

ReadHandler = Callable[[], Awaitable[bool]]


# --- ACCESSORY ---------------------------------------------------------------

@dataclass
class Accessory:
    """An occupancy sensor accessory exposed to the host."""

    display_name: str
    uuid: str
    sensor_type: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    serial_number: str | None = None
    context: dict[str, Any] = field(default_factory=dict)
    read_handler: ReadHandler | None = field(default=None, repr=False, compare=False)

    async def async_read(self) -> bool:
        """Run the attached read handler."""
        if self.read_handler is None:
            raise ReadFailure(self.sensor_type or self.display_name, "accessory is not configured")
        return await self.read_handler()


# --- COLLABORATORS -----------------------------------------------------------

class AccountClient(Protocol):
    """What the platform needs from the account API client."""

    @property
    def needs_auth(self) -> bool: ...

    async def get_last_awakening(self) -> datetime: ...


class HostApi(Protocol):
    """Accessory operations offered by the home-automation host."""

    def on(self, event: str, callback: Callable[[], None]) -> None: ...

    def generate_uuid(self, name: str) -> str: ...

    def create_accessory(self, display_name: str, uuid: str) -> Accessory: ...

    def register_platform_accessories(
        self, package_name: str, plugin_name: str, accessories: list[Accessory]
    ) -> None: ...

    def update_platform_accessories(self, accessories: list[Accessory]) -> None: ...

    def unregister_platform_accessories(
        self, package_name: str, plugin_name: str, accessories: list[Accessory]
    ) -> None: ...


@dataclass
class PlatformContext:
    """Everything the platform gets from its host."""

    logger: logging.Logger
    host: HostApi
    client_factory: Callable[[MotivAccount], AccountClient]
    clock: Callable[[], datetime] = dt_util.utcnow


# --- HELPERS -----------------------------------------------------------------

def accessory_uuid(host: HostApi, user_id: str | None, sensor_type: str) -> str:
    """Stable accessory identifier for a user and sensor type."""
    return host.generate_uuid(f"Motiv_{user_id}_{sensor_type}")


def display_name_for(sensor_type: str) -> str:
    """Capitalize a sensor type for display ("awake" -> "Awake")."""
    return f"{sensor_type[:1].upper()}{sensor_type[1:].lower()}"


# --- MOTIV PLATFORM ----------------------------------------------------------

class MotivPlatform:
    """
    Keeps the host's accessories in sync with the configured account.

    The account session is checked once, when the host reports it has
    finished launching. Accessories the host restores from its cache are
    kept by identifier; the ones the configuration no longer implies are
    removed during setup.
    """

    def __init__(self, context: PlatformContext, config: Mapping[str, Any] | None) -> None:
        self._context = context
        self.log = context.logger
        self.host = context.host
        self.config: Mapping[str, Any] = config or {}
        self.account: MotivAccount | None = None
        self.client: AccountClient | None = None
        self.accessories: dict[str, Accessory] = {}
        self._launched = False

        self.host.on(EVENT_DID_FINISH_LAUNCHING, self._on_did_finish_launching)


    # --- STARTUP --------------------------------------------------------------

    def _on_did_finish_launching(self) -> None:
        """Validate the session and set up accessories."""
        if self._launched:
            self.log.debug("Ignoring repeated %s event", EVENT_DID_FINISH_LAUNCHING)
            return
        self._launched = True

        try:
            self.account = check_session(self.config, self._context.clock())
        except (MissingConfigError, SessionExpiredError) as err:
            self.log.error("%s", err)
            return

        self.client = self._context.client_factory(self.account)
        self.setup()

    def setup(self) -> None:
        """Create or reuse the sensors for the validated account."""
        if self.client is None or self.account is None:
            return

        if self.client.needs_auth:
            self.log.error(
                "%s", AuthNotReadyError(f"The Motiv API needs authentication. {RENEW_HINT}.")
            )
            return

        try:
            expected = {
                accessory_uuid(self.host, self.account.user_id, sensor_type)
                for sensor_type in SENSOR_TYPES
            }
        except Exception as err:  # pylint: disable=broad-except
            self.log.error("Failed to compute accessory identifiers: %s", err)
            return
        self._prune_stale_accessories(expected)

        for sensor_type in SENSOR_TYPES:
            try:
                self.add_accessory(sensor_type)
            except Exception as err:  # pylint: disable=broad-except
                self.log.error("Failed to add %s sensor: %s", sensor_type, err)

    def _prune_stale_accessories(self, expected: Iterable[str]) -> None:
        """Remove cached accessories the configuration no longer implies."""
        for accessory in list(self.accessories.values()):
            if accessory.uuid not in expected:
                self.log.info("Pruning stale accessory: %s", accessory.display_name)
                try:
                    self.remove_accessory(accessory)
                except Exception as err:  # pylint: disable=broad-except
                    self.log.error("Failed to remove %s: %s", accessory.display_name, err)


    # --- CREATION -------------------------------------------------------------

    def add_accessory(self, sensor_type: str) -> Accessory:
        """Add a sensor, reusing the cached accessory when there is one."""
        account = self.account
        uuid = accessory_uuid(self.host, account.user_id, sensor_type)

        cached = self.accessories.get(uuid)
        if cached is not None:
            self.log.info("Reusing cached accessory: %s", cached.display_name)
            self.setup_sensor(cached, account, sensor_type)
            self.host.update_platform_accessories([cached])
            return cached

        self.log.info("Adding: %s", sensor_type)
        accessory = self.create_sensor_accessory(account, sensor_type)
        self.accessories[accessory.uuid] = accessory
        return accessory

    def create_sensor_accessory(self, account: MotivAccount, sensor_type: str) -> Accessory:
        """Build, configure and register a new sensor accessory."""
        uuid = accessory_uuid(self.host, account.user_id, sensor_type)
        self.log.info("Creating %s sensor for %s", sensor_type, account.user_id)

        accessory = self.host.create_accessory(sensor_type, uuid)
        self.setup_sensor(accessory, account, sensor_type)
        self.register_platform_accessory(accessory)
        return accessory

    def setup_sensor(self, accessory: Accessory, account: MotivAccount, sensor_type: str) -> None:
        """Fill in names, information and the read handler."""
        accessory.display_name = display_name_for(sensor_type)
        accessory.sensor_type = sensor_type
        accessory.manufacturer = MANUFACTURER
        accessory.model = f"Motiv {sensor_type} sensor"
        accessory.serial_number = f"{sensor_type.lower()}-{account.user_id}"
        accessory.read_handler = functools.partial(self.async_read, accessory)
        self.log.info("Setting up %s", accessory.display_name)


    # --- READ -----------------------------------------------------------------

    async def async_read(self, accessory: Accessory) -> bool:
        """Return True when the last awakening is not before now."""
        now = self._context.clock()
        self.log.debug("[%s] On get", accessory.display_name)

        if self.client is None:
            raise ReadFailure(accessory.sensor_type, "account client is not ready")

        try:
            woke_at = await self.client.get_last_awakening()
        except MotivApiError as err:
            self.log.error("Failed to update %s status: %s", accessory.sensor_type, err)
            raise ReadFailure(accessory.sensor_type, str(err)) from err
        except Exception as err:  # pylint: disable=broad-except
            self.log.error("Unexpected error updating %s status: %r", accessory.sensor_type, err)
            raise ReadFailure(accessory.sensor_type, repr(err)) from err

        occupied = woke_at >= now
        self.log.debug("Updated %s to be %s", accessory.sensor_type, occupied)
        return occupied


    # --- HOST REGISTRY --------------------------------------------------------

    def register_platform_accessory(self, accessory: Accessory) -> None:
        self.log.info("Registering %s", accessory.display_name)
        self.host.register_platform_accessories(PACKAGE_NAME, PLUGIN_NAME, [accessory])

    def configure_accessory(self, accessory: Accessory) -> None:
        """Called by the host for each accessory restored from its cache."""
        if accessory.uuid in self.accessories:
            self.log.debug("Already restored: %s", accessory.display_name)
            return
        self.log.info("Restoring: %s", accessory.display_name)
        self.accessories[accessory.uuid] = accessory

    def remove_accessory(self, accessory: Accessory | None) -> None:
        if accessory is None:
            return

        self.log.info("Removing: %s", accessory.display_name)
        self.accessories.pop(accessory.uuid, None)
        self.host.unregister_platform_accessories(PACKAGE_NAME, PLUGIN_NAME, [accessory])
