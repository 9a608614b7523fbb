"""
Parser Exceptions
=================

Two channels:
- FatalParseError: aborts the whole document parse; surfaced to the caller
  through ParseResult.error.
- FragmentError: scoped to one matched fragment; caught by the record
  builder, logged as WARNING and skipped.

A malformed weekday+day token is an InvalidDateTokenError and only costs its
fragment; a malformed period token raises InvalidPeriodTokenError, which is
also an InvalidDateTokenError but travels the fatal channel.
"""

from typing import Any, Dict, Optional


class RosterParseError(Exception):
    """Base class for every roster parsing failure"""

    def __init__(self, message: str, fragment: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.fragment = fragment
        self.context = context or {}

    @property
    def kind(self) -> str:
        return type(self).__name__


class FatalParseError(RosterParseError):
    """Condition that leaves no anchor for the rest of the pipeline"""


class FragmentError(RosterParseError):
    """Condition that only invalidates a single fragment"""


class EmptyInputError(FatalParseError):
    pass


class MissingPeriodError(FatalParseError):
    pass


class MissingUserIdError(FatalParseError):
    pass


class EmptySegmentError(FatalParseError):
    pass


class FragmentLimitExceededError(FatalParseError):
    pass


class InvalidDateTokenError(FragmentError):
    """Malformed weekday+day or period date token"""


class InvalidPeriodTokenError(InvalidDateTokenError, FatalParseError):
    """Malformed date inside the period declaration"""


class DateOutOfRangeError(FragmentError):
    pass


class InvalidTimeTokenError(FragmentError):
    pass
