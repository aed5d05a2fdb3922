"""
diagsnap: compare compiler diagnostics against saved snapshots
"""

from .levels import Normalization

from .model import (
    Context,
    Variations,
)

from .normalize import diagnostics

from .text import (
    trim,
    replace_case_insensitive,
)

from .exceptions import (
    DiagsnapError,
    ConfigError,
    ConfigNotFoundError,
    SnapshotError,
)

from .config import (
    load_config,
    context_from_config,
)

from .snapshot import (
    SnapshotStore,
    UpdateMode,
    Outcome,
    CheckResult,
)

__version__ = "0.1.0"
__all__ = [
    "Normalization",
    "Context",
    "Variations",
    "diagnostics",
    "trim",
    "replace_case_insensitive",
    "DiagsnapError",
    "ConfigError",
    "ConfigNotFoundError",
    "SnapshotError",
    "load_config",
    "context_from_config",
    "SnapshotStore",
    "UpdateMode",
    "Outcome",
    "CheckResult",
]
