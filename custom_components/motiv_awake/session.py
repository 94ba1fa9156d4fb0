"""Startup validation of the Motiv account session."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from .const import CONF_ACCOUNT, RENEW_HINT
from .exceptions import MissingConfigError, SessionExpiredError
from .models import MotivAccount


def check_session(config: Mapping[str, Any] | None, now: datetime) -> MotivAccount:
    """
    Validate the account section of ``config`` against ``now``.

    Raises MissingConfigError when there is no account section and
    SessionExpiredError when the session expiry is not strictly after ``now``.
    An account without an expiry is accepted; the client decides whether it
    still needs authentication.
    """
    account_data = (config or {}).get(CONF_ACCOUNT)
    if not account_data or not isinstance(account_data, Mapping):
        raise MissingConfigError(
            f"Incomplete configuration. {RENEW_HINT} for account configuration."
        )

    try:
        account = MotivAccount.from_config(account_data)
    except ValueError as err:
        raise SessionExpiredError(
            f"Account session expiry is unreadable ({err}). {RENEW_HINT}."
        ) from err

    if account.is_expired(now):
        raise SessionExpiredError(f"Account session expired. {RENEW_HINT}.")

    return account
