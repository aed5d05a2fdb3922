"""Matcher definitions for snapshot comparison."""

from __future__ import annotations

from typing import Callable

from ..model import Variations

SnapshotMatcher = Callable[[str, str], bool]


def default_snapshot_matcher(expected: str, actual: str) -> bool:
    """Default matcher: exact text equality, ignoring CRLF in the saved file."""

    return expected.replace("\r\n", "\n") == actual


def matches(
    variations: Variations,
    expected: str,
    matcher: SnapshotMatcher = default_snapshot_matcher,
) -> bool:
    """Return True when any variation is accepted for ``expected``."""

    return variations.any(lambda actual: matcher(expected, actual))
