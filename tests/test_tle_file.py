# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the TLE text file adapter."""
import logging

import pytest

from orbitsim.adapters.tle_file import TleFileSource, parse_tle_text, read_tle_file
from orbitsim.domain.element_set import ElementSetFormatError, format_element_lines
from orbitsim.ports.element_source import ElementSetSource


# ── Helpers ──────────────────────────────────────────────────────────

ISS_LINE1 = "1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991"
ISS_LINE2 = "2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482"

GEO_LINE1, GEO_LINE2 = format_element_lines(2, 0.05, 80.0, 0.0002, 0.0, 120.0, 1.00273)

BAD_LINE2 = ISS_LINE2[:8] + "  abc.de" + ISS_LINE2[16:]

_LOGGER = "orbitsim.adapters.tle_file"


def _text(*lines):
    return "\n".join(lines) + "\n"


# ── Parsing text ─────────────────────────────────────────────────────

class TestParseTleText:

    def test_three_line_set(self):
        [el] = parse_tle_text(_text("ISS (ZARYA)", ISS_LINE1, ISS_LINE2))
        assert el.name == "ISS (ZARYA)"
        assert el.mean_motion_rev_per_day == pytest.approx(15.50103472)

    def test_two_line_set_gets_catalog_name(self):
        [el] = parse_tle_text(_text(GEO_LINE1, GEO_LINE2))
        assert el.name == "SAT-00002"

    def test_mixed_layouts_in_order(self):
        text = _text("ISS (ZARYA)", ISS_LINE1, ISS_LINE2, GEO_LINE1, GEO_LINE2)
        assert [el.name for el in parse_tle_text(text)] == ["ISS (ZARYA)", "SAT-00002"]

    def test_blank_lines_and_padding_ignored(self):
        text = "\n\n  ISS (ZARYA)  \n" + ISS_LINE1 + "   \n\n" + ISS_LINE2 + "\n\n"
        [el] = parse_tle_text(text)
        assert el.name == "ISS (ZARYA)"

    def test_empty_text(self):
        assert parse_tle_text("") == []

    def test_strict_raises_on_bad_field(self):
        text = _text("BAD", ISS_LINE1, BAD_LINE2, "ISS (ZARYA)", ISS_LINE1, ISS_LINE2)
        with pytest.raises(ElementSetFormatError):
            parse_tle_text(text)

    def test_strict_raises_on_truncated_record(self):
        with pytest.raises(ElementSetFormatError, match="Incomplete"):
            parse_tle_text(_text("ISS (ZARYA)", ISS_LINE1))

    def test_lenient_skips_bad_field(self, caplog):
        text = _text("BAD", ISS_LINE1, BAD_LINE2, "ISS (ZARYA)", ISS_LINE1, ISS_LINE2)
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            result = parse_tle_text(text, strict=False)
        assert [el.name for el in result] == ["ISS (ZARYA)"]
        assert any("Skipping BAD" in r.getMessage() for r in caplog.records)

    def test_lenient_recovers_after_truncated_record(self, caplog):
        text = _text("BROKEN", ISS_LINE1, "ISS (ZARYA)", ISS_LINE1, ISS_LINE2)
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            result = parse_tle_text(text, strict=False)
        assert [el.name for el in result] == ["ISS (ZARYA)"]
        assert any(r.levelno == logging.WARNING for r in caplog.records)


# ── Files and ports ──────────────────────────────────────────────────

class TestReadTleFile:

    def test_read_file(self, tmp_path):
        path = tmp_path / "catalog.tle"
        path.write_text(_text("ISS (ZARYA)", ISS_LINE1, ISS_LINE2, GEO_LINE1, GEO_LINE2))
        result = read_tle_file(path)
        assert len(result) == 2

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "catalog.tle"
        path.write_text(_text("ISS (ZARYA)", ISS_LINE1, ISS_LINE2))
        assert len(read_tle_file(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_tle_file(tmp_path / "nope.tle")


class TestTleFileSource:

    def test_is_element_source(self, tmp_path):
        assert isinstance(TleFileSource(tmp_path / "x.tle"), ElementSetSource)

    def test_load(self, tmp_path):
        path = tmp_path / "catalog.tle"
        path.write_text(_text("ISS (ZARYA)", ISS_LINE1, ISS_LINE2))
        source = TleFileSource(str(path))
        assert source.path == path
        assert [el.name for el in source.load_element_sets()] == ["ISS (ZARYA)"]

    def test_lenient_source(self, tmp_path):
        path = tmp_path / "catalog.tle"
        path.write_text(_text("BAD", ISS_LINE1, BAD_LINE2))
        assert TleFileSource(path, strict=False).load_element_sets() == []
