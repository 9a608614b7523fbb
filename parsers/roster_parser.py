# roster_parser.py - Duty Roster Extraction Pipeline

"""
Roster Parser - Extract duty records from crew duty-plan documents

Pipeline (strictly sequential, one pass per document):
    normalize -> period/identity -> segment -> resolve dates -> build records
    -> sort -> summarize

Fatal conditions end the run early and come back as a failed ParseResult;
per-fragment problems are only logged.
"""

from pathlib import Path
from typing import BinaryIO, Optional, Union
import logging

from core.diagnostics import DiagnosticsLog
from core.errors import FatalParseError, FragmentLimitExceededError
from core.parameters import ParserConfig
from models.data_models import ParseResult
from parsers.block_segmenter import segment_text
from parsers.date_resolver import DateResolver
from parsers.pdf_text import extract_pdf_text
from parsers.period_extractor import extract_identity
from parsers.record_builder import RecordBuilder
from parsers.station_directory import StationDirectory
from parsers.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


class DutyRosterParser:
    """
    Parse duty-plan rosters into Duty records plus a diagnostics log.

    The parser holds configuration only; every call builds fresh per-document
    state, so one instance may serve many documents (and threads).
    """

    def __init__(self, config: ParserConfig = None):
        self.config = config or ParserConfig.default_config()

    def parse_text(self, text: Optional[str]) -> ParseResult:
        """Main entry point - extract duties from already-extracted text"""
        log = DiagnosticsLog()
        result = ParseResult()

        try:
            content = normalize_text(text)

            identity = extract_identity(content, log, self.config)
            result.period = identity.period
            result.operator_id = identity.operator_id

            segments = segment_text(content, log)
            if segments.fragment_count > self.config.max_fragments:
                raise FragmentLimitExceededError(
                    f"Roster yields {segments.fragment_count} fragments "
                    f"(limit {self.config.max_fragments})",
                    context={'fragments': segments.fragment_count,
                             'limit': self.config.max_fragments},
                )

            resolver = DateResolver(identity.period, log, self.config)
            builder = RecordBuilder(
                resolver,
                identity.operator_id,
                log,
                self.config,
                stations=StationDirectory() if self.config.check_stations else None,
            )
            result.duties = builder.build_all(segments)
            result.unknown_stations = sorted(builder.unknown_stations)

        except FatalParseError as e:
            log.warning(f"Failed to parse roster: {e.message}",
                        context={'error': e, **e.context}, fragment=e.fragment)
            logger.error(f"Roster parse aborted ({e.kind}): {e.message}")
            result.duties = []
            result.error = e
            result.logs = list(log.entries)
            return result

        stats = result.summary()
        log.edge_case(
            'Summary',
            f"Processed {stats['total']} duties: "
            f"{stats['flights']} flights, "
            f"{stats['deadheads']} deadheads, "
            f"{stats['standby']} standby, "
            f"{stats['off']} off days",
            context=stats,
        )
        result.logs = list(log.entries)
        return result

    def parse_pdf(self, source: Union[str, Path, BinaryIO]) -> ParseResult:
        """Extract the text layer of a PDF and parse it"""
        logger.info(f"Parsing PDF roster: {source}")
        return self.parse_text(extract_pdf_text(source))


def parse_roster_text(text: Optional[str], config: ParserConfig = None) -> ParseResult:
    """Parse one document's extracted text"""
    return DutyRosterParser(config).parse_text(text)
