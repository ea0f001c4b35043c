"""Tests for aggregate bar table rendering."""

from datetime import datetime

from polyfetch.table import COLUMNS, build_rows, format_timestamp, render_aggregates, render_table

BARS = [
    {"v": 70790813.0, "vw": 131.6292, "o": 130.465, "c": 130.15, "h": 133.41, "l": 129.89, "t": 1673240400000, "n": 645365},
    {"v": 63896155.0, "vw": 129.8473, "o": 130.26, "c": 130.73, "h": 131.2636, "l": 128.12, "t": 1673326800000, "n": 554940},
    {"v": 69458949.0, "vw": 132.3106, "o": 131.25, "c": 133.49, "h": 133.51, "l": 130.46, "t": 1673413200000, "n": 561278},
]


class TestFormatTimestamp:
    def test_epoch_millis_to_local_string(self):
        expected = datetime.fromtimestamp(1673240400).strftime("%c")
        assert format_timestamp(1673240400000) == expected

    def test_missing_timestamp_blank(self):
        assert format_timestamp(None) == ""

    def test_non_numeric_passthrough(self):
        assert format_timestamp("soon") == "soon"


class TestBuildRows:
    def test_one_row_per_bar_in_order(self):
        rows = build_rows({"results": BARS})

        assert len(rows) == 3
        assert [r.close for r in rows] == [130.15, 130.73, 133.49]
        assert rows[0].volume == 70790813.0
        assert rows[0].vwap == 131.6292
        assert rows[0].transactions == 645365

    def test_missing_results_yields_no_rows(self):
        assert build_rows({"status": "OK", "resultsCount": 0}) == []
        assert build_rows(None) == []

    def test_non_list_results_yield_no_rows(self):
        for results in (5, True, "bars", {"v": 1}):
            assert build_rows({"results": results}) == []

    def test_missing_fields_are_none(self):
        rows = build_rows({"results": [{"c": 1.0}]})

        assert rows[0].close == 1.0
        assert rows[0].vwap is None
        assert rows[0].timestamp == ""


class TestRenderTable:
    def test_header_then_rows(self):
        lines = render_aggregates({"results": BARS}).splitlines()

        assert len(lines) == 2 + len(BARS)
        assert lines[0] == "| Volume | VWAP | Open | Close | High | Low | Timestamp | Transactions |"
        assert lines[1].count("---") == len(COLUMNS)

    def test_column_order(self):
        line = render_aggregates({"results": BARS[:1]}).splitlines()[2]
        cells = [c.strip() for c in line.strip("|").split("|")]

        ts = datetime.fromtimestamp(1673240400).strftime("%c")
        assert cells == ["70790813.0", "131.6292", "130.465", "130.15", "133.41", "129.89", ts, "645365"]

    def test_empty_table_is_header_only(self):
        assert len(render_table([]).splitlines()) == 2

    def test_none_cells_blank(self):
        line = render_aggregates({"results": [{"c": 2.5}]}).splitlines()[2]
        cells = [c.strip() for c in line.strip("|").split("|")]

        assert cells == ["", "", "", "2.5", "", "", "", ""]
