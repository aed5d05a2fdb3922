"""Storage helpers for ``*.stderr`` snapshots."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

import portalocker

from ..exceptions import SnapshotError
from ..model import Variations
from .matchers import SnapshotMatcher, default_snapshot_matcher, matches
from .modes import UpdateMode

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".stderr"


class Outcome(Enum):
    """Result of comparing output against its snapshot."""

    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING = "missing"
    UPDATED = "updated"


@dataclass
class CheckResult:
    """Outcome of one snapshot check."""

    name: str
    path: Path
    outcome: Outcome
    expected: Optional[str]
    actual: str
    written: Optional[Path] = None

    @property
    def passed(self) -> bool:
        return self.outcome in (Outcome.MATCH, Outcome.UPDATED)


class SnapshotStore:
    """Reads, checks and writes snapshot files below ``root``."""

    def __init__(
        self,
        root: Path,
        *,
        wip_dir: Optional[Path] = None,
        mode: UpdateMode = UpdateMode.WIP,
        matcher: SnapshotMatcher = default_snapshot_matcher,
    ) -> None:
        self.root = Path(root)
        self.wip_dir = Path(wip_dir) if wip_dir is not None else self.root / "wip"
        self.mode = mode
        self.matcher = matcher
        self.paths: List[Path] = []
        self.new: List[Path] = []
        self.used: List[Path] = []

    # ------------------------------------------------------------------ paths
    def path_for(self, name: str) -> Path:
        """Snapshot path for ``name``, which must stay inside ``root``."""

        relative = Path(name)
        if relative.anchor or ".." in relative.parts:
            raise SnapshotError(f"Snapshot name must be relative to {self.root}: {name}")
        if not name.endswith(SNAPSHOT_SUFFIX):
            name += SNAPSHOT_SUFFIX
        return self.root / name

    def wip_path_for(self, name: str) -> Path:
        return self.wip_dir / self.path_for(name).relative_to(self.root)

    def load_all(self) -> None:
        if not self.root.exists():
            self.paths = []
            return
        self.paths = sorted(
            path
            for path in self.root.rglob(f"*{SNAPSHOT_SUFFIX}")
            if self.wip_dir not in path.parents
        )

    # ------------------------------------------------------------------ io
    def read_snapshot(self, path: Path) -> Optional[str]:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SnapshotError(f"Failed to read snapshot {path}: {exc}") from exc
        logger.debug(f"Read snapshot {path}")
        return text

    def write_snapshot(self, path: Path, text: str) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with portalocker.Lock(tmp, "w", timeout=5, encoding="utf-8", newline="\n") as handle:
                handle.write(text)
            os.replace(tmp, path)
        except (OSError, portalocker.LockException) as exc:
            try:
                tmp.unlink()
            except OSError:
                pass
            raise SnapshotError(f"Failed to write snapshot {path}: {exc}") from exc
        logger.info(f"Wrote snapshot {path}")

    # ------------------------------------------------------------------ checking
    def check(self, name: str, variations: Variations) -> CheckResult:
        path = self.path_for(name)
        actual = variations.preferred()
        expected = self.read_snapshot(path)

        if expected is None:
            written = self._write_missing(name, path, actual)
            return CheckResult(name, path, Outcome.MISSING, None, actual, written)

        if matches(variations, expected, self.matcher):
            self.mark_used(path)
            return CheckResult(name, path, Outcome.MATCH, expected, actual)

        if self.mode is UpdateMode.OVERWRITE:
            self.write_snapshot(path, actual)
            self.mark_used(path)
            return CheckResult(name, path, Outcome.UPDATED, expected, actual, path)

        return CheckResult(name, path, Outcome.MISMATCH, expected, actual)

    def mark_used(self, path: Path) -> None:
        if path not in self.used:
            self.used.append(path)

    def _write_missing(self, name: str, path: Path, actual: str) -> Optional[Path]:
        if self.mode is UpdateMode.DISABLED:
            return None
        target = path if self.mode is UpdateMode.OVERWRITE else self.wip_path_for(name)
        self.write_snapshot(target, actual)
        if target not in self.new:
            self.new.append(target)
        return target
