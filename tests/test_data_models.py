"""
Tests for data models, serialization and the diagnostics log
"""

from datetime import date, datetime

import pytest
import pytz

from core.diagnostics import DiagnosticsLog
from core.errors import EmptyInputError
from core.parameters import ParserConfig
from models.data_models import Duty, DutyType, LogCategory, Period, format_utc
from parsers import pdf_text


def _utc(*args):
    return datetime(*args, tzinfo=pytz.utc)


class TestSerialization:

    def test_format_utc_milliseconds(self):
        assert format_utc(_utc(2024, 4, 1, 23, 59, 59, 999000)) == '2024-04-01T23:59:59.999Z'

    def test_format_utc_converts_offsets(self):
        local = pytz.timezone('Asia/Qatar').localize(datetime(2024, 4, 2, 11, 0))
        assert format_utc(local) == '2024-04-02T08:00:00.000Z'

    def test_log_context_is_jsonable(self):
        log = DiagnosticsLog()
        entry = log.warning('Error parsing OFF duty',
                            context={'error': EmptyInputError('x'), 'date': date(2024, 4, 1)},
                            fragment='Mon01O_M')
        record = entry.to_dict()

        assert record['type'] == 'WARNING'
        assert record['line'] == 'Mon01O_M'
        assert record['context'] == {
            'error': {'error': 'EmptyInputError', 'message': 'x'},
            'date': '2024-04-01',
        }


class TestDuty:

    def test_departure_after_arrival_rejected(self):
        with pytest.raises(AssertionError):
            Duty(id='x', date=date(2024, 4, 1), type=DutyType.FLIGHT, flight_number='BA1',
                 departure_time=_utc(2024, 4, 1, 10), arrival_time=_utc(2024, 4, 1, 9))

    def test_period_window(self):
        period = Period(start_date=date(2024, 4, 1), end_date=date(2024, 4, 15))
        assert period.window_end == date(2024, 4, 16)
        assert period.contains(date(2024, 4, 16))
        assert not period.contains(date(2024, 3, 31))


class TestDiagnosticsLog:

    def test_append_only_order(self):
        log = DiagnosticsLog()
        log.ignored('tail', 'summary section')
        log.edge_case('Tue01', 'fallback date')
        log.unparseable('Wed03', 'no legs')

        assert [e.category for e in log] == [
            LogCategory.IGNORED, LogCategory.EDGE_CASE, LogCategory.UNPARSEABLE,
        ]
        assert len(log.of(LogCategory.EDGE_CASE)) == 1
        assert len(log) == 3


class TestParserConfig:

    def test_presets(self):
        assert ParserConfig.default_config().date_search_months == 2
        assert ParserConfig.strict_config().period_grace_days == 0
        assert ParserConfig.lenient_config().check_stations is False

    def test_invalid_values_rejected(self):
        with pytest.raises(AssertionError):
            ParserConfig(date_search_months=0)


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _FakePdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_pdf_pages_joined(monkeypatch):
    pages = [_FakePage('Mon01 O_M'), _FakePage(None), _FakePage('Tue02 O_S')]
    monkeypatch.setattr(pdf_text.pdfplumber, 'open', lambda source: _FakePdf(pages))

    assert pdf_text.extract_pdf_text('roster.pdf') == 'Mon01 O_M\n\nTue02 O_S'
