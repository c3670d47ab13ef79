# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
TLE text adapter: reads element-set files and converts to domain objects.

File I/O is confined to this layer.

Accepted layouts, mixed freely within one file:
    NAME / line 1 / line 2     (three-line sets)
    line 1 / line 2            (two-line sets; named "SAT-<catalog number>")

Blank lines are ignored. In strict mode the first malformed record raises
ElementSetFormatError; otherwise it is logged and skipped.
"""
import logging
from pathlib import Path

from orbitsim.domain.element_set import (
    ElementSetFormatError,
    OrbitalElements,
    parse_two_line_element,
)
from orbitsim.ports.element_source import ElementSetSource

_log = logging.getLogger(__name__)


def _is_line1(line: str) -> bool:
    return line.startswith("1 ")


def _is_line2(line: str) -> bool:
    return line.startswith("2 ")


def _default_name(line1: str) -> str:
    catalog = line1[2:7].strip()
    return f"SAT-{catalog}" if catalog else "UNKNOWN"


def parse_tle_text(text: str, strict: bool = True) -> list[OrbitalElements]:
    """
    Parse every element set in a block of TLE text.

    Args:
        text: File contents.
        strict: Raise on the first malformed record instead of skipping it.

    Returns:
        OrbitalElements in file order.

    Raises:
        ElementSetFormatError: In strict mode, for the first bad record.
    """
    lines = [line.rstrip() for line in text.splitlines() if line.strip()]
    results: list[OrbitalElements] = []
    i = 0

    while i < len(lines):
        if _is_line1(lines[i]):
            name = _default_name(lines[i])
            start = i
        else:
            name = lines[i].strip()
            start = i + 1

        line1 = lines[start] if start < len(lines) else None
        line2 = lines[start + 1] if start + 1 < len(lines) else None

        if line1 is None or line2 is None or not _is_line1(line1) or not _is_line2(line2):
            error = ElementSetFormatError(
                f"Incomplete element set for {name!r} at line {i + 1}"
            )
            if strict:
                raise error
            _log.warning("Skipping %s: %s", name, error)
            i += 1
            continue

        try:
            results.append(parse_two_line_element(name, line1, line2))
        except ElementSetFormatError as e:
            if strict:
                raise
            _log.warning("Skipping %s: %s", name, e)
        i = start + 2

    return results


def read_tle_file(path: str | Path, strict: bool = True) -> list[OrbitalElements]:
    """Read and parse a TLE file (UTF-8)."""
    with open(path, encoding="utf-8") as f:
        return parse_tle_text(f.read(), strict=strict)


class TleFileSource(ElementSetSource):
    """ElementSetSource backed by a TLE text file."""

    def __init__(self, path: str | Path, strict: bool = True):
        self._path = Path(path)
        self._strict = strict

    @property
    def path(self) -> Path:
        return self._path

    def load_element_sets(self) -> list[OrbitalElements]:
        elements = read_tle_file(self._path, strict=self._strict)
        _log.debug("Loaded %d element sets from %s", len(elements), self._path)
        return elements
