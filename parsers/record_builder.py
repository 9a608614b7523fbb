"""
Record Builder
==============

Turns matched roster fragments into Duty records.

Construction rules:
- OFF: whole UTC day, no stations
- STANDBY: reporting station on both ends, clock values on the resolved date
- FLIGHT/DEADHEAD: HHMMHHMM clock pair; an arrival clock earlier than the
  departure clock lands on the next day. Only the departure (anchor) date is
  checked against the period.

Every fragment is built in isolation: a failure is logged as WARNING and the
fragment skipped, never aborting its siblings.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Set
import re
import uuid
import logging
import pytz

from core.diagnostics import DiagnosticsLog
from core.errors import FragmentError, InvalidTimeTokenError
from core.parameters import ParserConfig
from models.data_models import Duty, DutyType
from parsers.block_segmenter import DutyBlock, Segments
from parsers.date_resolver import DateResolver
from parsers.patterns import DEADHEAD_PREFIX
from parsers.station_directory import StationDirectory

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def clock_to_datetime(day: date, clock: str) -> datetime:
    """'0830' on 2024-04-02 -> 2024-04-02T08:30:00Z"""
    if len(clock) != 4 or not clock.isdigit():
        raise InvalidTimeTokenError(f"Invalid clock value: {clock}", fragment=clock)

    hours, minutes = int(clock[:2]), int(clock[2:])
    if hours > 23 or minutes > 59:
        raise InvalidTimeTokenError(f"Clock value out of range: {clock}", fragment=clock)

    return pytz.utc.localize(datetime.combine(day, time(hours, minutes)))


def source_key(operator_id: str, day: date, fragment: str) -> str:
    """Record key as published by the roster system (not unique)"""
    return f"{operator_id}/{day.strftime('%d-%m-%Y')}/{fragment}"


class RecordBuilder:
    """Builds the duty sequence of one document"""

    def __init__(self, resolver: DateResolver, operator_id: str, log: DiagnosticsLog,
                 config: ParserConfig = None, stations: Optional[StationDirectory] = None):
        self.resolver = resolver
        self.operator_id = operator_id
        self.log = log
        self.config = config or ParserConfig.default_config()
        self.stations = stations
        self.unknown_stations: Set[str] = set()

    # ------------------------------------------------------------------
    # Per-kind construction
    # ------------------------------------------------------------------

    def build_off(self, match: re.Match) -> Duty:
        day = self.resolver.resolve(match.group('weekday'), match.group('day'))
        code = match.group('code')
        return Duty(
            id=str(uuid.uuid4()),
            date=day,
            type=DutyType.OFF,
            duty_code=code,
            flight_number=code,
            departure_time=pytz.utc.localize(datetime.combine(day, time.min)),
            arrival_time=pytz.utc.localize(datetime.combine(day, END_OF_DAY)),
            source_fragment=match.group(0),
            source_key=source_key(self.operator_id, day, match.group(0)),
        )

    def build_standby(self, match: re.Match) -> Duty:
        day = self.resolver.resolve(match.group('weekday'), match.group('day'))
        code = match.group('code')
        station = match.group('station')

        start = clock_to_datetime(day, match.group('start'))
        end = clock_to_datetime(day, match.group('end'))
        if end < start:
            if not self.config.rollover_standby:
                raise InvalidTimeTokenError("Standby ends before it starts", fragment=match.group(0))
            end += timedelta(days=1)
            self.log.edge_case(match.group(0), "standby ends after midnight; end moved to next day")

        self._check_station(station, match.group(0))
        return Duty(
            id=str(uuid.uuid4()),
            date=day,
            type=DutyType.STANDBY,
            duty_code=code,
            flight_number=code,
            departure_station=station,
            arrival_station=station,
            departure_time=start,
            arrival_time=end,
            source_fragment=match.group(0),
            source_key=source_key(self.operator_id, day, match.group(0)),
        )

    def build_leg(self, leg: re.Match, day: date) -> Duty:
        flight = leg.group('flight')
        times = leg.group('times')
        dep_clock, arr_clock = times[:4], times[4:]

        departure = clock_to_datetime(day, dep_clock)
        # Overnight: arrival clock earlier than departure clock lands next day
        arrival_day = day + timedelta(days=1) if int(arr_clock) < int(dep_clock) else day
        arrival = clock_to_datetime(arrival_day, arr_clock)

        self._check_station(leg.group('departure'), leg.group(0))
        self._check_station(leg.group('arrival'), leg.group(0))
        return Duty(
            id=str(uuid.uuid4()),
            date=day,
            type=DutyType.DEADHEAD if flight.startswith(DEADHEAD_PREFIX) else DutyType.FLIGHT,
            flight_number=flight,
            departure_station=leg.group('departure'),
            arrival_station=leg.group('arrival'),
            departure_time=departure,
            arrival_time=arrival,
            source_fragment=leg.group(0),
            source_key=source_key(self.operator_id, day, leg.group(0)),
        )

    def _check_station(self, code: str, fragment: str) -> None:
        if self.stations is None or code in self.unknown_stations:
            return
        if not self.stations.is_known(code):
            self.unknown_stations.add(code)
            self.log.edge_case(fragment, f"station {code} not found in IATA directory; kept as-is")

    # ------------------------------------------------------------------
    # Families
    # ------------------------------------------------------------------

    def build_off_days(self, matches: List[re.Match]) -> List[Duty]:
        duties = []
        for match in matches:
            try:
                duties.append(self.build_off(match))
            except FragmentError as e:
                self.log.warning('Error parsing OFF duty', context={'error': e},
                                 fragment=match.group(0))
        return duties

    def build_standbys(self, matches: List[re.Match]) -> List[Duty]:
        duties = []
        for match in matches:
            try:
                duties.append(self.build_standby(match))
            except FragmentError as e:
                self.log.warning('Error parsing STBY duty', context={'error': e},
                                 fragment=match.group(0))
        return duties

    def build_flights(self, blocks: List[DutyBlock]) -> List[Duty]:
        duties = []
        for block in blocks:
            try:
                day = self.resolver.resolve(block.weekday, block.day)
            except FragmentError as e:
                self.log.warning('Error processing flight block', context={'error': e},
                                 fragment=block.fragment)
                continue

            if not block.legs:
                self.log.unparseable(block.fragment, "duty block contains no flight legs")
                continue

            for leg in block.legs:
                try:
                    duties.append(self.build_leg(leg, day))
                except FragmentError as e:
                    self.log.warning('Error parsing individual flight',
                                     context={'error': e, 'date': day},
                                     fragment=leg.group(0))
        return duties

    def build_all(self, segments: Segments) -> List[Duty]:
        """Build every family, then order by anchor date (stable)"""
        duties = (self.build_off_days(segments.off_days)
                  + self.build_standbys(segments.standbys)
                  + self.build_flights(segments.duty_blocks))
        return sorted(duties, key=lambda d: d.date)
