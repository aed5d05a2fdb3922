"""Ordered normalization levels."""

from __future__ import annotations

from enum import IntEnum


class Normalization(IntEnum):
    """Normalization stages, from least to most aggressive.

    The integer rank is the order. A level applies every rule of the levels
    below it. Snapshots saved at an older level must keep their meaning, so new
    members are only ever appended.
    """

    BASIC = 0
    STRIP_COULD_NOT_COMPILE = 1
    STRIP_COULD_NOT_COMPILE_2 = 2
    STRIP_FOR_MORE_INFORMATION = 3
    STRIP_FOR_MORE_INFORMATION_2 = 4
    DIR_BACKSLASH = 5
    TRIM_END = 6
    RUST_LIB = 7

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


LEVELS = tuple(Normalization)
