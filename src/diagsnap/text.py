"""Text helpers shared by the normalization pipeline."""

from __future__ import annotations

import os
from typing import Union

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")

TextLike = Union[str, bytes, bytearray, memoryview]

# Unicode White_Space. Narrower than str.strip(), which also strips \x1c-\x1f.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def decode_lossy(output: TextLike) -> str:
    """Decode raw output as UTF-8, replacing invalid sequences."""

    if isinstance(output, str):
        return output
    return bytes(output).decode("utf-8", errors="replace")


def trim(output: TextLike) -> str:
    """Strip trailing whitespace, leaving one newline or nothing at all."""

    normalized = decode_lossy(output).rstrip(WHITESPACE)
    if normalized:
        normalized += "\n"
    return normalized


def ascii_lower(value: str) -> str:
    """Lowercase ASCII letters only so string offsets are preserved."""

    return value.translate(_ASCII_LOWER)


def replace_case_insensitive(
    haystack: str,
    needle: Union[str, os.PathLike],
    replacement: str,
) -> str:
    """Replace every case-insensitive occurrence of ``needle`` in ``haystack``.

    Matching happens on ASCII-lowercased copies but the output is spliced
    together from the original text, so anything outside a match keeps its
    case.
    """

    pattern = ascii_lower(os.fspath(needle))
    if not pattern:
        return haystack

    lowered = ascii_lower(haystack)
    pieces = []
    idx = 0
    while True:
        found = lowered.find(pattern, idx)
        if found == -1:
            break
        pieces.append(haystack[idx:found])
        pieces.append(replacement)
        idx = found + len(pattern)
    pieces.append(haystack[idx:])
    return "".join(pieces)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` dropping a trailing ``\\r`` and the final empty segment."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
