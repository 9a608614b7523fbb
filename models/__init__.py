"""
Roster data models
"""

from models.data_models import (
    DutyType,
    LogCategory,
    Period,
    Duty,
    LogEntry,
    ParseResult,
    format_utc,
)

__all__ = [
    'DutyType',
    'LogCategory',
    'Period',
    'Duty',
    'LogEntry',
    'ParseResult',
    'format_utc',
]
