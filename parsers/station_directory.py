"""
Station directory backed by airportsdata (~7,800 IATA airports)
"""

import airportsdata

# Module-level load (cached)
_IATA_DB = airportsdata.load('IATA')


class StationDirectory:
    """
    IATA code lookup for roster station codes.

    Roster codes are kept verbatim either way; the directory only tells the
    parser which codes deserve an EDGE_CASE note.
    """

    @classmethod
    def is_known(cls, code: str) -> bool:
        return code.upper() in _IATA_DB
