"""
Core Parser Components
======================

Configuration, error channels and diagnostics shared by every stage of the
roster extraction pipeline.
"""

from core.parameters import ParserConfig
from core.diagnostics import DiagnosticsLog
from core.errors import (
    RosterParseError,
    FatalParseError,
    FragmentError,
    EmptyInputError,
    MissingPeriodError,
    MissingUserIdError,
    EmptySegmentError,
    FragmentLimitExceededError,
    InvalidDateTokenError,
    InvalidPeriodTokenError,
    DateOutOfRangeError,
    InvalidTimeTokenError,
)

__all__ = [
    # Configuration
    'ParserConfig',
    # Diagnostics
    'DiagnosticsLog',
    # Errors - fatal channel
    'RosterParseError',
    'FatalParseError',
    'EmptyInputError',
    'MissingPeriodError',
    'MissingUserIdError',
    'EmptySegmentError',
    'FragmentLimitExceededError',
    'InvalidPeriodTokenError',
    # Errors - per-fragment channel
    'FragmentError',
    'InvalidDateTokenError',
    'DateOutOfRangeError',
    'InvalidTimeTokenError',
]
