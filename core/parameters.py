"""
Configuration & Parameters for the Roster Parser
================================================

ParserConfig holds every tunable of the extraction pipeline. The defaults
reproduce the published roster grammar exactly; presets are provided for
stricter and more permissive runs.
"""

from dataclasses import dataclass


@dataclass
class ParserConfig:
    """Extraction pipeline settings"""

    # Date disambiguation
    date_search_months: int = 2   # Consecutive months tried from the period start month
    period_grace_days: int = 1    # Anchor dates may fall this many days after period end
    century: int = 2000           # Added to the 2-digit year of period tokens

    # Work bound per document (off + standby + flight-leg fragments)
    max_fragments: int = 5000

    # Record construction
    rollover_standby: bool = True  # Standby ending before it starts ends next day
    check_stations: bool = True    # Flag station codes unknown to the IATA directory

    def __post_init__(self):
        assert 1 <= self.date_search_months <= 12, \
            f"date_search_months must be 1-12, got {self.date_search_months}"
        assert self.period_grace_days >= 0, "period_grace_days must not be negative"
        assert self.century % 100 == 0, f"century must be a multiple of 100, got {self.century}"
        assert self.max_fragments > 0, "max_fragments must be positive"

    @classmethod
    def default_config(cls):
        return cls()

    @classmethod
    def strict_config(cls):
        """
        Rejects anything outside the published window.
        - Weekday must match in the period start month
        - No grace day after the period end
        - Tighter fragment bound
        """
        return cls(
            date_search_months=1,
            period_grace_days=0,
            max_fragments=1000,
        )

    @classmethod
    def lenient_config(cls):
        """Wider search for rosters spanning a month boundary late in the month"""
        return cls(
            date_search_months=3,
            period_grace_days=2,
            max_fragments=20000,
            check_stations=False,
        )
