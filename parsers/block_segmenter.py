"""
Block Segmentation
==================

Cuts the normalized roster down to the duty grid and splits it into the three
independent token families (off days, standbys, flight-duty blocks).
"""

from dataclasses import dataclass, field
import re
from typing import List
import logging

from core.diagnostics import DiagnosticsLog
from core.errors import EmptySegmentError
from parsers.patterns import (
    END_MARKER_PATTERN,
    HEADER_PATTERN,
    OFF_PATTERN,
    STANDBY_PATTERN,
    DUTY_BLOCK_PATTERN,
    FLIGHT_LEG_PATTERN,
)

logger = logging.getLogger(__name__)


@dataclass
class DutyBlock:
    """Flight-duty block and the legs found inside it"""
    match: re.Match
    legs: List[re.Match] = field(default_factory=list)

    @property
    def fragment(self) -> str:
        return self.match.group(0)

    @property
    def weekday(self) -> str:
        return self.match.group('weekday')

    @property
    def day(self) -> str:
        return self.match.group('day')


@dataclass
class Segments:
    off_days: List[re.Match] = field(default_factory=list)
    standbys: List[re.Match] = field(default_factory=list)
    duty_blocks: List[DutyBlock] = field(default_factory=list)

    @property
    def fragment_count(self) -> int:
        """Fragments that will each produce (at most) one record"""
        return (len(self.off_days) + len(self.standbys)
                + sum(len(block.legs) for block in self.duty_blocks))


def truncate_summary(text: str, log: DiagnosticsLog) -> str:
    """Drop everything from the first end-of-roster marker on"""
    if not text:
        raise EmptySegmentError("Input text is empty or undefined")

    marker = END_MARKER_PATTERN.search(text)
    if not marker:
        log.warning("No flight time pattern found for splitting text")
        return text

    head, tail = text[:marker.start()], text[marker.start():]
    if not head:
        raise EmptySegmentError("Text is empty after splitting at flight time pattern")

    log.ignored(marker.group(0), "trailing summary after end-of-roster marker",
                context={'discardedChars': len(tail)})
    return head


def strip_header(text: str, log: DiagnosticsLog) -> str:
    """Remove the repeated table-header preamble"""
    stripped, removed = HEADER_PATTERN.subn('', text)
    if removed:
        log.ignored(None, "table header preamble", context={'occurrences': removed})

    if not stripped.strip():
        raise EmptySegmentError("Text is empty after removing header pattern")
    return stripped


def segment_text(text: str, log: DiagnosticsLog) -> Segments:
    """Truncate, strip the header, then scan the three token families"""
    text = truncate_summary(text, log)
    text = strip_header(text, log)

    segments = Segments(
        off_days=list(OFF_PATTERN.finditer(text)),
        standbys=list(STANDBY_PATTERN.finditer(text)),
        duty_blocks=[
            DutyBlock(match=m, legs=list(FLIGHT_LEG_PATTERN.finditer(m.group(0))))
            for m in DUTY_BLOCK_PATTERN.finditer(text)
        ],
    )

    logger.debug(
        f"Segmented: {len(segments.off_days)} off, {len(segments.standbys)} standby, "
        f"{len(segments.duty_blocks)} duty blocks"
    )
    return segments
