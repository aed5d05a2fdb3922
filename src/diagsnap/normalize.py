"""Reduce compiler diagnostics to comparable snapshot text."""

from __future__ import annotations

import logging
from typing import Optional

from .levels import LEVELS, Normalization
from .model import Context, Variations
from .text import WHITESPACE, TextLike, decode_lossy, replace_case_insensitive, split_lines, trim

logger = logging.getLogger(__name__)

RUSTLIB_MARKER = "/rustlib/src/rust/src/"
# Length of "/rustlib/src/rust"; the collapsed path keeps the trailing "/src/".
_RUSTLIB_PREFIX_LEN = len("/rustlib/src/rust")

ALWAYS_DROPPED_PREFIXES = ("error: aborting due to ",)
VERBOSE_HINT = "To learn more, run the command again with --verbose."

# (minimum level, line prefixes dropped from that level up)
LEVEL_DROPPED_PREFIXES = (
    (Normalization.STRIP_COULD_NOT_COMPILE, ("error: Could not compile `",)),
    (Normalization.STRIP_COULD_NOT_COMPILE_2, ("error: could not compile `",)),
    (
        Normalization.STRIP_FOR_MORE_INFORMATION,
        ("For more information about this error, try `rustc --explain",),
    ),
    (
        Normalization.STRIP_FOR_MORE_INFORMATION_2,
        (
            "Some errors have detailed explanations:",
            "For more information about an error, try `rustc --explain",
        ),
    ),
)


def diagnostics(output: TextLike, context: Context) -> Variations:
    """Produce every accepted normalization of ``output``.

    A saved snapshot passes if it equals any of the returned variations. Keeping
    the whole set, instead of a single canonical string, means snapshots saved
    before a level existed still match after it is introduced.
    """

    text = decode_lossy(output).replace("\r\n", "\n")
    variations = Variations(tuple(apply(text, level, context) for level in LEVELS))
    logger.debug(f"Normalized {len(text)} chars into {len(variations)} variations")
    return variations


def apply(original: str, level: Normalization, context: Context) -> str:
    """Run the line filter at ``level`` and reassemble the surviving lines."""

    normalized = ""
    for line in split_lines(original):
        kept = filter_line(line, level, context)
        if kept is None:
            continue
        normalized += kept
        if not normalized.endswith("\n\n"):
            normalized += "\n"
    return trim(normalized)


def filter_line(line: str, level: Normalization, context: Context) -> Optional[str]:
    """Rewrite one line, or return None when it is dropped at ``level``."""

    stripped = line.lstrip(WHITESPACE)

    if stripped.startswith("--> "):
        cut_end = max(line.rfind("/"), line.rfind("\\"))
        if cut_end != -1:
            cut_start = line.find(">") + 2
            return line[:cut_start] + "$DIR/" + line[cut_end + 1:]

    if stripped.startswith("::: "):
        return _secondary_location(line, level, context)

    if line.startswith(ALWAYS_DROPPED_PREFIXES) or line == VERBOSE_HINT:
        return None

    for minimum, prefixes in LEVEL_DROPPED_PREFIXES:
        if level >= minimum and line.startswith(prefixes):
            return None

    if level >= Normalization.DIR_BACKSLASH and context.source_dir:
        line = line.replace(context.source_dir + "\\", "$DIR/")

    if level >= Normalization.TRIM_END:
        line = line.rstrip(WHITESPACE)

    line = _replace(line, context.package_name, "$CRATE")
    line = replace_case_insensitive(line, context.source_dir, "$DIR")
    line = replace_case_insensitive(line, context.workspace, "$WORKSPACE")
    return line


def _secondary_location(line: str, level: Normalization, context: Context) -> str:
    line = replace_case_insensitive(line, context.workspace, "$WORKSPACE").replace("\\", "/")
    if level >= Normalization.RUST_LIB:
        pos = line.find(RUSTLIB_MARKER)
        if pos != -1:
            # ::: $RUST/src/libstd/net/ip.rs:83:1
            start = line.find("::: ") + 4
            line = line[:start] + "$RUST" + line[pos + _RUSTLIB_PREFIX_LEN:]
    return line


def _replace(line: str, needle: str, replacement: str) -> str:
    if not needle:
        return line
    return line.replace(needle, replacement)
