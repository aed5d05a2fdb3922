"""Human-readable reporting for snapshot checks."""

from __future__ import annotations

import difflib

from .store import CheckResult, Outcome


def format_result(result: CheckResult) -> str:
    """Render a status line, plus a diff or the new output when relevant."""

    lines = [f"{result.name} ... {result.outcome.value}"]

    if result.outcome is Outcome.MISSING:
        if result.written is not None:
            lines.append(f"NOTE: writing the following output to `{result.written}`.")
        else:
            lines.append(f"Snapshot not found: {result.path}")
        lines.append(_fence(result.actual))
    elif result.outcome is Outcome.MISMATCH:
        lines.extend(
            difflib.unified_diff(
                (result.expected or "").replace("\r\n", "\n").splitlines(),
                result.actual.splitlines(),
                fromfile=f"expected: {result.path}",
                tofile="actual",
                lineterm="",
            )
        )
    elif result.outcome is Outcome.UPDATED:
        lines.append(f"Overwrote {result.path} with the new output.")

    return "\n".join(lines)


def _fence(text: str) -> str:
    rule = "┈" * 60
    return f"{rule}\n{text}{rule}"
