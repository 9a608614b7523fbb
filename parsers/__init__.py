"""
Roster parsing pipeline
"""

from parsers.roster_parser import DutyRosterParser, parse_roster_text
from parsers.pdf_text import extract_pdf_text

__all__ = [
    'DutyRosterParser',
    'parse_roster_text',
    'extract_pdf_text',
]
