"""Dataclasses passed in and out of the normalization pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, Union

from .levels import LEVELS, Normalization

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class Context:
    """Values redacted out of compiler output."""

    package_name: str
    source_directory: PathLike
    workspace_root: PathLike

    @property
    def source_dir(self) -> str:
        return os.fspath(self.source_directory)

    @property
    def workspace(self) -> str:
        return os.fspath(self.workspace_root)


@dataclass(frozen=True)
class Variations:
    """One normalized output per level, least aggressive first.

    A snapshot is accepted if it equals any variation. The last one is the most
    thoroughly cleaned and is what gets shown or saved on a mismatch.
    """

    variations: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.variations:
            raise ValueError("Variations requires at least one normalized output")
        object.__setattr__(self, "variations", tuple(self.variations))

    def preferred(self) -> str:
        return self.variations[-1]

    def any(self, predicate: Callable[[str], bool]) -> bool:
        return any(predicate(variation) for variation in self.variations)

    def for_level(self, level: Normalization) -> str:
        return self.variations[LEVELS.index(level)]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variations)

    def __len__(self) -> int:
        return len(self.variations)
