"""
Tests for text normalization and period/identity extraction

Run: python -m pytest tests/test_period_extractor.py -v
"""

from datetime import date

import pytest

from core.errors import (
    EmptyInputError, FatalParseError, InvalidDateTokenError, InvalidPeriodTokenError,
    MissingPeriodError, MissingUserIdError,
)
from models.data_models import LogCategory
from parsers.period_extractor import extract_identity, parse_period_date
from parsers.text_normalizer import normalize_text


class TestNormalizeText:

    def test_removes_all_whitespace(self):
        assert normalize_text("Mon01 O_M\n\tTue02\r\n STBY_S1") == "Mon01O_MTue02STBY_S1"

    @pytest.mark.parametrize("text", [None, "", "  \n\t "])
    def test_empty_input_is_fatal(self, text):
        with pytest.raises(EmptyInputError):
            normalize_text(text)


class TestParsePeriodDate:

    def test_two_digit_year_in_2000s(self):
        assert parse_period_date("01Apr24") == date(2024, 4, 1)
        assert parse_period_date("31Dec99") == date(2099, 12, 31)

    @pytest.mark.parametrize("token", ["1Apr24x", "01Foo24", "01AprXX", "01Apr2", "31Feb24"])
    def test_malformed_token(self, token):
        with pytest.raises(InvalidPeriodTokenError) as excinfo:
            parse_period_date(token)
        # Same error family as fragment date tokens, but on the fatal channel
        assert isinstance(excinfo.value, InvalidDateTokenError)
        assert isinstance(excinfo.value, FatalParseError)


class TestExtractIdentity:

    def test_period_and_operator(self, log):
        text = normalize_text("Name (123456) Period: 01Apr24 - 15Apr24 contract A320")
        identity = extract_identity(text, log)

        assert identity.period.start_date == date(2024, 4, 1)
        assert identity.period.end_date == date(2024, 4, 15)
        assert identity.operator_id == "123456"

        entries = log.of(LogCategory.EDGE_CASE)
        assert len(entries) == 1
        assert "123456" in entries[0].message
        assert "2024-04-01" in entries[0].message

    def test_missing_period(self, log):
        with pytest.raises(MissingPeriodError):
            extract_identity("Name(123456)01Apr24-15Apr24contract", log)

    def test_missing_user_id(self, log):
        with pytest.raises(MissingUserIdError):
            extract_identity("Name(12345)Period:01Apr24-15Apr24contract", log)

    def test_malformed_end_token(self, log):
        with pytest.raises(InvalidDateTokenError):
            extract_identity("(123456)Period:01Apr24-15Xyz24contract", log)

    def test_inverted_period_is_a_warning(self, log):
        identity = extract_identity("(123456)Period:15Apr24-01Apr24contract", log)
        assert identity.period.start_date > identity.period.end_date
        assert len(log.of(LogCategory.WARNING)) == 1
