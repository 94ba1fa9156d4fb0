"""Data models for Motiv Awake."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from homeassistant.util import dt as dt_util  # type: ignore

from .const import CONF_EMAIL, CONF_SESSION_EXPIRY, CONF_SESSION_TOKEN, CONF_USER_ID


def parse_timestamp(value: Any) -> datetime:
    """
    Convert an API or config timestamp to an aware UTC datetime.
    Accepts ISO-8601 strings and epoch seconds or milliseconds.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    elif isinstance(value, (int, float)):
        # Anything past year 33658 in seconds is really milliseconds
        seconds = value / 1000 if value > 1e12 else value
        try:
            return dt_util.utc_from_timestamp(seconds)
        except (OverflowError, OSError) as err:
            raise ValueError(f"Timestamp out of range: {value!r}") from err
    elif isinstance(value, str):
        parsed = dt_util.parse_datetime(value.strip())
        if parsed is None:
            raise ValueError(f"Invalid timestamp: {value!r}")
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt_util.UTC)
    return dt_util.as_utc(parsed)


def _get(data: Mapping[str, Any], key: str, alias: str) -> Any:
    value = data.get(key)
    return data.get(alias) if value is None else value


@dataclass(frozen=True)
class MotivAccount:
    """Account credentials and session material."""

    user_id: str | None
    email: str | None = None
    session_token: str | None = None
    session_expiry: datetime | None = None

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> MotivAccount:
        """Build an account from the persisted ``account`` mapping."""
        expiry = _get(data, CONF_SESSION_EXPIRY, "session_expiry")
        user_id = _get(data, CONF_USER_ID, "user_id")
        return cls(
            user_id=str(user_id) if user_id is not None else None,
            email=_get(data, CONF_EMAIL, "email"),
            session_token=_get(data, CONF_SESSION_TOKEN, "session_token"),
            session_expiry=parse_timestamp(expiry) if expiry else None,
        )

    def is_expired(self, now: datetime) -> bool:
        """Return True when the session is not strictly after ``now``."""
        return self.session_expiry is not None and not self.session_expiry > now

    def as_config(self) -> dict[str, Any]:
        """Serialize back to the persisted ``account`` mapping."""
        return {
            CONF_USER_ID: self.user_id,
            CONF_EMAIL: self.email,
            CONF_SESSION_TOKEN: self.session_token,
            CONF_SESSION_EXPIRY: (
                self.session_expiry.isoformat() if self.session_expiry else None
            ),
        }
