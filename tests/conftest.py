"""
Shared fixtures for the roster parser tests
"""

from datetime import date

import pytest

from core.diagnostics import DiagnosticsLog
from models.data_models import Period

from roster_samples import SAMPLE_ROSTER


@pytest.fixture
def sample_roster():
    return SAMPLE_ROSTER


@pytest.fixture
def april_period():
    return Period(start_date=date(2024, 4, 1), end_date=date(2024, 4, 15))


@pytest.fixture
def log():
    return DiagnosticsLog()

