"""
Period & operator identity extraction
"""

from dataclasses import dataclass
from datetime import date
import logging

from core.diagnostics import DiagnosticsLog
from core.errors import InvalidPeriodTokenError, MissingPeriodError, MissingUserIdError
from core.parameters import ParserConfig
from models.data_models import Period
from parsers.patterns import PERIOD_PATTERN, USER_ID_PATTERN

logger = logging.getLogger(__name__)

MONTHS = {
    'Jan': 1, 'Feb': 2, 'Mar': 3, 'Apr': 4, 'May': 5, 'Jun': 6,
    'Jul': 7, 'Aug': 8, 'Sep': 9, 'Oct': 10, 'Nov': 11, 'Dec': 12,
}

DATE_TOKEN_WIDTH = 7  # DDMmmYY


@dataclass(frozen=True)
class RosterIdentity:
    period: Period
    operator_id: str


def parse_period_date(token: str, century: int = 2000) -> date:
    """'01Apr24' -> date(2024, 4, 1)"""
    day_str, month_str, year_str = token[0:2], token[2:5], token[5:7]

    if (len(token) != DATE_TOKEN_WIDTH or not day_str.isdigit()
            or month_str not in MONTHS or not year_str.isdigit()):
        raise InvalidPeriodTokenError(f"Invalid date format: {token}", fragment=token)

    try:
        return date(century + int(year_str), MONTHS[month_str], int(day_str))
    except ValueError as e:
        raise InvalidPeriodTokenError(f"Invalid date: {token} ({e})", fragment=token)


def extract_identity(text: str, log: DiagnosticsLog,
                     config: ParserConfig = None) -> RosterIdentity:
    """
    Find the roster period and the 6-digit operator identifier.

    Both anchor all later date resolution, so any failure here is fatal.
    """
    config = config or ParserConfig.default_config()

    period_match = PERIOD_PATTERN.search(text)
    if not period_match:
        raise MissingPeriodError("Could not find duty period in text")

    body = period_match.group('body')
    start_token = body[0:DATE_TOKEN_WIDTH]
    end_token = body[DATE_TOKEN_WIDTH + 1:2 * DATE_TOKEN_WIDTH + 1]

    period = Period(
        start_date=parse_period_date(start_token, config.century),
        end_date=parse_period_date(end_token, config.century),
        grace_days=config.period_grace_days,
    )

    user_match = USER_ID_PATTERN.search(text)
    if not user_match:
        raise MissingUserIdError("Could not find user ID in text")
    operator_id = user_match.group('user_id')

    if period.end_date < period.start_date:
        log.warning("Period end precedes period start",
                    context={'start': period.start_date, 'end': period.end_date},
                    fragment=period_match.group(0))

    log.edge_case(
        'Period and UserID',
        f"Found period: {period.start_date.isoformat()} - {period.end_date.isoformat()}, "
        f"UserID: {operator_id}",
        context={'period': period.to_dict(), 'operatorId': operator_id},
    )
    logger.debug(f"Roster {operator_id}: {period.start_date} to {period.end_date}")

    return RosterIdentity(period=period, operator_id=operator_id)
