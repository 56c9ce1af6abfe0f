"""Tests for event rendering."""

import io

import pytest

from deltadiff.emit import format_feature, format_plain, write_events
from deltadiff.events import DiffEvent, EventType, count_events


class TestFormatPlain:
    def test_header(self):
        assert format_plain(DiffEvent.new_sequence("chr1")) == ">chr1"

    @pytest.mark.parametrize(
        "event,line",
        [
            (DiffEvent.gap("chr1", 100, 201), "GAP 100\t201\t100"),
            (DiffEvent.chain_jump("chr1", 5, 6), "JMP 5\t6\t0"),
            (DiffEvent.inversion("chr1", 10, 8), "INV 10\t8\t-3"),
            (DiffEvent.duplication("chr1", 301, 600), "DUP 301\t600\t300"),
            (DiffEvent.seq_jump("chr1", "ctgB", 700, 751), "SEQ 700\t751\t50\tctgB"),
            (DiffEvent.indel("chr1", 400, 451, 50, 20), "INS 400\t451\t50\t20\t30"),
            (DiffEvent.indel("ctgA", 400, 421, 20, 50), "DEL 400\t421\t20\t50\t-30"),
        ],
    )
    def test_lines(self, event, line):
        assert format_plain(event) == line

    def test_zero_delta_is_deletion(self):
        assert format_plain(DiffEvent.indel("chr1", 500, 501, 0, 0)) == "DEL 500\t501\t0\t0\t0"


class TestFormatFeature:
    def test_header_has_no_feature(self):
        assert format_feature(DiffEvent.new_sequence("chr1")) is None

    def test_sequence_jump_record(self):
        rec = format_feature(DiffEvent.seq_jump("chr1", "ctgB", 700, 751))
        assert rec == (
            "{FEA\n"
            "typ:A\n"
            "clr:700,751\n"
            "com:SEQ 700\t751\t50\tctgB\n"
            "src:chr1,CTG\n"
            "}"
        )

    def test_indel_record(self):
        rec = format_feature(DiffEvent.indel("chr1", 400, 451, 50, 20))
        assert "com:INS 400\t451\t50\t20\t30\n" in rec
        assert "clr:400,451\n" in rec


class TestWriteEvents:
    EVENTS = [
        DiffEvent.new_sequence("chr1"),
        DiffEvent.gap("chr1", 0, 11),
    ]

    def test_plain(self):
        out = io.StringIO()
        assert write_events(self.EVENTS, out) == 2
        assert out.getvalue() == ">chr1\nGAP 0\t11\t10\n"

    def test_amos_skips_headers(self):
        out = io.StringIO()
        assert write_events(self.EVENTS, out, style="amos") == 1
        assert out.getvalue().startswith("{FEA\n")
        assert out.getvalue().endswith("}\n")

    def test_defaults_to_stdout(self, capsys):
        write_events(self.EVENTS)
        assert capsys.readouterr().out.startswith(">chr1\n")

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="Unknown output style"):
            write_events(self.EVENTS, io.StringIO(), style="json")


class TestEvents:
    def test_lengths(self):
        assert DiffEvent.gap("s", 10, 20).length == 9
        assert DiffEvent.duplication("s", 10, 20).length == 11

    def test_indel_kind_follows_delta(self):
        assert DiffEvent.indel("s", 1, 5, 3, 2).kind is EventType.INS
        assert DiffEvent.indel("s", 1, 5, 3, 3).kind is EventType.DEL
        assert DiffEvent.gap("s", 1, 5).delta is None

    def test_to_dict(self):
        d = DiffEvent.indel("s", 1, 5, 3, 1).to_dict()
        assert d == {
            "seq": "s", "type": "INS", "start": 1, "end": 5, "length": 3,
            "gap_sweep": 3, "gap_partner": 1, "delta": 2,
        }
        assert DiffEvent.seq_jump("s", "p", 1, 5).to_dict()["partner"] == "p"

    def test_count_events(self):
        counts = count_events([
            DiffEvent.new_sequence("s"),
            DiffEvent.gap("s", 0, 1),
            DiffEvent.gap("s", 5, 9),
            DiffEvent.duplication("s", 2, 4),
        ])
        assert counts["GAP"] == 2
        assert counts["DUP"] == 1
        assert counts["INV"] == 0
        assert ">" not in counts
