"""
Tests for summary truncation, header stripping and token-family scanning

Run: python -m pytest tests/test_block_segmenter.py -v
"""

import pytest

from core.errors import EmptySegmentError
from models.data_models import LogCategory
from parsers.block_segmenter import segment_text, strip_header, truncate_summary
from parsers.text_normalizer import normalize_text


class TestTruncateSummary:

    def test_cuts_at_first_marker(self, log):
        head = truncate_summary("Mon01O_MFlighttime72:30Sat06O_VFlighttime10", log)
        assert head == "Mon01O_M"
        ignored = log.of(LogCategory.IGNORED)
        assert len(ignored) == 1
        assert ignored[0].source_fragment == "Flighttime72"

    def test_missing_marker_keeps_full_text(self, log):
        assert truncate_summary("Mon01O_M", log) == "Mon01O_M"
        warnings = log.of(LogCategory.WARNING)
        assert len(warnings) == 1
        assert "flight time" in warnings[0].message.lower()

    def test_marker_at_start_is_fatal(self, log):
        with pytest.raises(EmptySegmentError):
            truncate_summary("Flighttime72Mon01O_M", log)


class TestStripHeader:

    def test_removes_every_header_occurrence(self, log):
        header = "Individualdutyplanfor" + "X(123456)" + "dateHdutyRdeparrACinfo" * 3
        text = header + "Mon01O_M" + header + "Tue02O_S"
        assert strip_header(text, log) == "Mon01O_MTue02O_S"
        assert log.of(LogCategory.IGNORED)[0].context == {'occurrences': 2}

    def test_header_only_is_fatal(self, log):
        with pytest.raises(EmptySegmentError):
            strip_header("Individualdutyplanfor" + "dateHdutyRdeparrACinfo" * 3, log)


class TestSegmentText:

    def test_families(self, sample_roster, log):
        segments = segment_text(normalize_text(sample_roster), log)

        assert [m.group(0) for m in segments.off_days] == ["Mon01O_M", "Thu04O_S"]
        assert [m.group(0) for m in segments.standbys] == ["Tue02STBY_S1LHR08001600"]
        assert [b.fragment[:5] for b in segments.duty_blocks] == ["Wed03", "Fri05"]
        assert segments.fragment_count == 5

    def test_summary_tokens_are_not_scanned(self, sample_roster, log):
        segments = segment_text(normalize_text(sample_roster), log)
        assert "Sat06O_V" not in [m.group(0) for m in segments.off_days]

    def test_standby_groups(self, log):
        segments = segment_text("Tue02STBY_S1LHR08001600", log)
        match = segments.standbys[0]
        assert match.group('weekday') == "Tue"
        assert match.group('day') == "02"
        assert match.group('code') == "STBY_S1"
        assert match.group('station') == "LHR"
        assert (match.group('start'), match.group('end')) == ("0800", "1600")

    def test_block_ends_at_first_fdp_annotation(self, log):
        text = ("Wed03PickUp0500BA1234LHR06000700JFK[FDP10:30]"
                "Thu04C/I0600BA0100JFK08001000BOS[FDP05:00]")
        blocks = segment_text(text, log).duty_blocks

        assert len(blocks) == 2
        assert blocks[0].fragment.endswith("[FDP10:30]")
        assert [leg.group('flight') for leg in blocks[0].legs] == ["BA1234"]
        assert [leg.group('flight') for leg in blocks[1].legs] == ["BA0100"]

    def test_leg_variants(self, log):
        text = ("Wed03PickUp"
                "DH/BA1234RLHR06000700JFK"  # Deadhead with reissue marker
                "123JFK08000930BOS"         # 3-digit trip identifier
                "[FDP10:30]")
        legs = segment_text(text, log).duty_blocks[0].legs

        assert [leg.group('flight') for leg in legs] == ["DH/BA1234", "123"]
        assert [leg.group('departure') for leg in legs] == ["LHR", "JFK"]
        assert [leg.group('times') for leg in legs] == ["06000700", "08000930"]
        assert [leg.group('arrival') for leg in legs] == ["JFK", "BOS"]
