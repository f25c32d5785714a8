"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Latest-release lookup for the build info shown in the web client.
"""

import logging
from dataclasses import dataclass
from typing import Dict

import httpx

LOGGER = logging.getLogger(__name__)

_PRERELEASE_MARKERS = ("-beta", "-pre", "-rc")


@dataclass(frozen=True)
class UpdateState:
    """Result of the most recent update check."""

    latest_version: str = ""
    has_update: bool = False


_UPDATE_STATE: Dict[str, UpdateState] = {"value": UpdateState()}


def get_update_state() -> UpdateState:
    """Return the last known update state without triggering a check."""

    return _UPDATE_STATE["value"]


def set_update_state(state: UpdateState) -> None:
    """Replace the stored update state."""

    _UPDATE_STATE["value"] = state


def is_prerelease(version: str) -> bool:
    """True for beta, pre-release and release-candidate builds."""

    return any(marker in version for marker in _PRERELEASE_MARKERS)


async def check_for_updates(current_version: str, url: str, timeout: float = 5.0) -> UpdateState:
    """Fetch the latest released versions and record whether an update exists.

    The release feed is a JSON object with ``stable`` and ``testing`` keys.
    Pre-release builds compare against ``testing``, all others against
    ``stable``. Failures are logged and leave the stored state unchanged.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        LOGGER.warning("Update check failed: %s", exc)
        return get_update_state()

    channel = "testing" if is_prerelease(current_version) else "stable"
    latest = payload.get(channel) if isinstance(payload, dict) else None
    if not isinstance(latest, str) or not latest:
        LOGGER.warning("Update check returned no %s version", channel)
        return get_update_state()

    state = UpdateState(latest_version=latest, has_update=latest != current_version)
    set_update_state(state)
    LOGGER.info("Latest %s version: %s (update available: %s)", channel, latest, state.has_update)
    return state
