"""
Diagnostics Log
===============

Append-only record of every anomaly met while parsing one document.
Entries are also mirrored to the module logger so batch runs show them live.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging

from models.data_models import LogCategory, LogEntry

logger = logging.getLogger(__name__)

_LEVELS = {
    LogCategory.UNPARSEABLE: logging.WARNING,
    LogCategory.WARNING: logging.WARNING,
    LogCategory.EDGE_CASE: logging.INFO,
    LogCategory.IGNORED: logging.DEBUG,
}


class DiagnosticsLog:
    """One per parse run; never truncated or reordered"""

    def __init__(self):
        self._entries: List[LogEntry] = []

    def _add(self, category: LogCategory, message: str,
             fragment: Optional[str] = None,
             context: Optional[Dict[str, Any]] = None) -> LogEntry:
        entry = LogEntry(
            category=category,
            message=message,
            source_fragment=fragment,
            context=context,
        )
        self._entries.append(entry)
        logger.log(_LEVELS[category], f"[{category.value}] {message}"
                   + (f" | {fragment}" if fragment else ""))
        return entry

    def unparseable(self, fragment: str, reason: str) -> LogEntry:
        return self._add(LogCategory.UNPARSEABLE, f"Failed to parse fragment: {reason}", fragment)

    def edge_case(self, fragment: Optional[str], handling: str,
                  context: Optional[Dict[str, Any]] = None) -> LogEntry:
        return self._add(LogCategory.EDGE_CASE, f"Edge case handled: {handling}", fragment, context)

    def ignored(self, fragment: Optional[str], reason: str,
                context: Optional[Dict[str, Any]] = None) -> LogEntry:
        return self._add(LogCategory.IGNORED, f"Ignored input: {reason}", fragment, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None,
                fragment: Optional[str] = None) -> LogEntry:
        return self._add(LogCategory.WARNING, message, fragment, context)

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    def of(self, category: LogCategory) -> List[LogEntry]:
        return [e for e in self._entries if e.category is category]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))
