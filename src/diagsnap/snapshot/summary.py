"""Exit summary reporting for snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .store import SnapshotStore


def unused_snapshots(store: SnapshotStore) -> List[Path]:
    """Snapshots discovered by ``load_all`` that no check has matched."""

    used = set(store.used)
    return [path for path in store.paths if path not in used]


def print_summary(store: Optional[SnapshotStore]) -> None:
    """Print new snapshot files and saved snapshots left unused this run."""

    if store is None:
        return

    new = sorted(store.new)
    unused = unused_snapshots(store)
    if not new and not unused:
        return

    print("===== SUMMARY (diagsnap) =====")
    if new:
        print(f"New snapshots ({len(new)}):")
        for path in new:
            print(f"- {path}")
    if unused:
        print(f"Unused snapshots ({len(unused)}):")
        for path in unused:
            print(f"- {path}")
