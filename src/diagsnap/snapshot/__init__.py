"""Snapshot package exports."""

from .matchers import SnapshotMatcher, default_snapshot_matcher, matches
from .modes import UpdateMode, update_mode_from_env
from .report import format_result
from .store import CheckResult, Outcome, SnapshotStore
from .summary import print_summary

__all__ = [
    "SnapshotMatcher",
    "default_snapshot_matcher",
    "matches",
    "UpdateMode",
    "update_mode_from_env",
    "format_result",
    "CheckResult",
    "Outcome",
    "SnapshotStore",
    "print_summary",
]
