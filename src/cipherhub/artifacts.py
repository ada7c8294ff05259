"""Shared helpers for reading tab-delimited CIPHER artifacts."""

from __future__ import annotations

import re
from collections.abc import Iterator

_DIGIT_RUN = re.compile(r"[0-9]+")


class ArtifactParseError(ValueError):
    """Raised when a shared artifact does not have the expected layout."""

    def __init__(self, artifact: str, line_no: int, message: str) -> None:
        super().__init__(f"{artifact}, line {line_no}: {message}")
        self.artifact = artifact
        self.line_no = line_no


def iter_tsv_lines(text: str) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_no, fields)`` for every line, numbering from 1.

    Only ``\n`` ends a line, with one trailing ``\r`` dropped per line; other
    characters that ``str.splitlines`` treats as breaks stay inside fields.
    Blank lines are yielded with an empty field list so callers keep their
    own line numbering. A trailing newline does not produce an extra line.
    """

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    for line_no, line in enumerate(lines, start=1):
        stripped = line[:-1] if line.endswith("\r") else line
        if not stripped.strip():
            yield line_no, []
            continue
        yield line_no, stripped.split("\t")


def first_digit_run(value: object) -> str | None:
    """Return the first run of ASCII digits in ``str(value)``, if any."""

    if value is None:
        return None
    match = _DIGIT_RUN.search(str(value))
    return match.group(0) if match else None


def leading_int(value: str) -> int | None:
    """Parse the integer prefix of a field, ignoring surrounding whitespace."""

    match = re.match(r"\s*([0-9]+)", value)
    return int(match.group(1)) if match else None


def clean_field(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
