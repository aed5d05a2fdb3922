"""Update modes controlling how snapshots are written."""

from __future__ import annotations

import os
from enum import Enum

from ..exceptions import ConfigError

ENV_VAR = "DIAGSNAP"


class UpdateMode(Enum):
    """Controls what happens when a snapshot is missing or stale."""

    WIP = "wip"
    OVERWRITE = "overwrite"
    DISABLED = "disabled"


_ENV_CHOICES = {
    "wip": UpdateMode.WIP,
    "overwrite": UpdateMode.OVERWRITE,
    "disabled": UpdateMode.DISABLED,
    "0": UpdateMode.DISABLED,
    "false": UpdateMode.DISABLED,
}


def update_mode_from_env(default: UpdateMode = UpdateMode.WIP) -> UpdateMode:
    """Read the update mode from ``$DIAGSNAP``, keeping ``default`` when unset."""

    value = os.environ.get(ENV_VAR)
    if value is None or not value.strip():
        return default
    try:
        return _ENV_CHOICES[value.strip().lower()]
    except KeyError:
        raise ConfigError(
            f"Unrecognized {ENV_VAR}={value!r}; expected one of wip, overwrite, disabled"
        ) from None
