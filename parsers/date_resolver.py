"""
Date Resolution
===============

Roster rows carry only a weekday abbreviation and a day of month ("Wed03").
The absolute date is recovered by anchoring on the period start month and
searching forward for a month in which that day falls on that weekday.
"""

from datetime import date, timedelta
from typing import Optional
import logging

from core.diagnostics import DiagnosticsLog
from core.errors import DateOutOfRangeError, InvalidDateTokenError
from core.parameters import ParserConfig
from models.data_models import Period

logger = logging.getLogger(__name__)

WEEKDAYS = {
    'Mon': 0, 'Tue': 1, 'Wed': 2, 'Thu': 3, 'Fri': 4, 'Sat': 5, 'Sun': 6,
}


def _candidate(year: int, month: int, day: int) -> date:
    """
    Calendar date for (year, month, day) where month may exceed 12 and day
    may exceed the month length; both overflow forward (Apr 31 -> May 1).
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def _later_candidate(year: int, month: int, day: int) -> date:
    """
    Candidate in a later search month. A day missing from that month moves
    the whole date one month on, keeping the day (Feb 30 -> Mar 30).
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        return date(year, month, day)
    except ValueError:
        return _candidate(year, month + 1, day)


class DateResolver:
    """Resolves weekday+day tokens against one roster period"""

    def __init__(self, period: Period, log: Optional[DiagnosticsLog] = None,
                 config: ParserConfig = None):
        self.period = period
        self.log = log
        self.config = config or ParserConfig.default_config()

    def resolve(self, weekday: str, day_of_month: str) -> date:
        """
        Args:
            weekday: 3-letter English abbreviation, e.g. 'Mon'
            day_of_month: 1-2 digit string, e.g. '01'

        Raises:
            InvalidDateTokenError: unknown weekday or day outside 1-31
            DateOutOfRangeError: resolved date outside the period window
        """
        token = f"{weekday}{day_of_month}"
        if (weekday not in WEEKDAYS or not day_of_month.isdigit()
                or not 1 <= len(day_of_month) <= 2):
            raise InvalidDateTokenError("Invalid date string format", fragment=token,
                                        context={'dateStr': token})
        day = int(day_of_month)
        if not 1 <= day <= 31:
            raise InvalidDateTokenError("Invalid date string format", fragment=token,
                                        context={'dateStr': token})

        start = self.period.start_date
        candidate = None
        for offset in range(self.config.date_search_months):
            if offset == 0:
                candidate = _candidate(start.year, start.month, day)
            else:
                candidate = _later_candidate(start.year, start.month + offset, day)
            if candidate.weekday() == WEEKDAYS[weekday]:
                break
        else:
            # Best-effort: keep the last candidate even though its weekday disagrees
            if self.log is not None:
                self.log.edge_case(
                    token,
                    f"weekday not matched within {self.config.date_search_months} month(s); "
                    f"using {candidate.isoformat()}",
                    context={'dateStr': token, 'resolved': candidate},
                )

        if not self.period.contains(candidate):
            raise DateOutOfRangeError(
                "Date outside of valid period range",
                fragment=token,
                context={
                    'date': token,
                    'testDateDay': candidate,
                    'periodStartDay': self.period.start_date,
                    'periodEndDay': self.period.window_end,
                },
            )

        logger.debug(f"Resolved {token} -> {candidate}")
        return candidate
