"""
data_models.py - Core Data Structures
======================================

Data models for roster extraction: the roster period, duty records,
diagnostics entries and the per-document parse result.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional
from enum import Enum
import pytz


# ============================================================================
# ENUMS
# ============================================================================

class DutyType(Enum):
    """Kind of roster entry"""
    OFF = "OFF"
    STANDBY = "STANDBY"
    FLIGHT = "FLIGHT"
    DEADHEAD = "DEADHEAD"  # Crew positioning as passengers


class LogCategory(Enum):
    """Diagnostics taxonomy - every recorded anomaly falls in exactly one"""
    UNPARSEABLE = "UNPARSEABLE"  # Fragment matched no known grammar
    EDGE_CASE = "EDGE_CASE"      # Unusual but handled (informational)
    IGNORED = "IGNORED"          # Input deliberately discarded
    WARNING = "WARNING"          # Possible loss or degradation of data


# ============================================================================
# SERIALIZATION HELPERS
# ============================================================================

def format_utc(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-04-02T08:00:00.000Z"""
    value = value.astimezone(pytz.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


def _jsonable(value: Any) -> Any:
    """Best-effort conversion of log context values for JSON output"""
    if isinstance(value, datetime):
        return format_utc(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseException):
        return {'error': type(value).__name__, 'message': str(value)}
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


# ============================================================================
# ROSTER STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class Period:
    """Published validity window of one roster document"""
    start_date: date
    end_date: date
    grace_days: int = 1  # Duties may anchor on the day after the period ends

    @property
    def window_end(self) -> date:
        """Last acceptable anchor date (inclusive)"""
        return self.end_date + timedelta(days=self.grace_days)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.window_end

    def to_dict(self) -> Dict[str, str]:
        return {
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class Duty:
    """Single roster entry built from one matched fragment"""
    id: str
    date: date
    type: DutyType
    flight_number: str
    departure_time: datetime
    arrival_time: datetime
    departure_station: Optional[str] = None
    arrival_station: Optional[str] = None
    duty_code: Optional[str] = None  # Raw off/standby sub-code, e.g. "O_M", "STBY_S1"
    annotation: Optional[str] = None  # Reserved for remarks
    source_fragment: str = ''
    source_key: str = ''

    def __post_init__(self):
        assert self.departure_time <= self.arrival_time, \
            f"Duty {self.flight_number} on {self.date}: departure after arrival"

    @property
    def is_overnight(self) -> bool:
        return self.arrival_time.date() > self.departure_time.date()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready record (camelCase keys, as written to *_duties.json)"""
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'type': self.type.value,
            'dutyCode': self.duty_code,
            'flightNumber': self.flight_number,
            'departureStation': self.departure_station,
            'arrivalStation': self.arrival_station,
            'departureTime': format_utc(self.departure_time),
            'arrivalTime': format_utc(self.arrival_time),
            'annotation': self.annotation,
            'sourceKey': self.source_key,
        }


@dataclass(frozen=True)
class LogEntry:
    """One diagnostics record"""
    category: LogCategory
    message: str
    source_fragment: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(pytz.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.category.value,
            'message': self.message,
            'line': self.source_fragment,
            'context': _jsonable(self.context) if self.context is not None else None,
            'timestamp': format_utc(self.timestamp),
        }


# ============================================================================
# PARSE RESULT
# ============================================================================

@dataclass
class ParseResult:
    """
    Outcome of parsing one roster document.

    A fatal failure is carried in `error` (no duties are returned); recoverable
    problems live only in `logs`.
    """
    duties: List[Duty] = field(default_factory=list)
    logs: List[LogEntry] = field(default_factory=list)
    period: Optional[Period] = None
    operator_id: Optional[str] = None
    unknown_stations: List[str] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def count(self, duty_type: DutyType) -> int:
        return sum(1 for d in self.duties if d.type is duty_type)

    def summary(self) -> Dict[str, int]:
        return {
            'total': len(self.duties),
            'flights': self.count(DutyType.FLIGHT),
            'deadheads': self.count(DutyType.DEADHEAD),
            'standby': self.count(DutyType.STANDBY),
            'off': self.count(DutyType.OFF),
        }

    def logs_of(self, category: LogCategory) -> List[LogEntry]:
        return [entry for entry in self.logs if entry.category is category]

    def duties_as_dicts(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.duties]

    def logs_as_dicts(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.logs]
