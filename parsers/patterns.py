"""
Roster Token Grammar
====================

Compiled patterns for the whitespace-free roster text. The layout is
positional once whitespace is gone, so digit groups are fixed-width and block
bounds are non-greedy.

Token shapes (examples after normalization):
    Period:01Apr24-15Apr24...contract     period declaration
    (123456)                              operator identifier
    Mon01O_M                              off day
    Tue02STBY_S1LHR08001600               standby
    Wed03PickUp ... [FDP10:30]            flight-duty block
    DH/BA1234RLHR06000700JFK              flight leg inside a block
    Flighttime72                          start of the trailing summary
"""

import re

WEEKDAY = r'(?P<weekday>[A-Z][a-z]{2})'
DAY = r'(?P<day>\d{2})'
CLOCK_PAIR = r'(?P<times>\d{8})'

PERIOD_PATTERN = re.compile(r'Period:(?P<body>.*?)contract')

USER_ID_PATTERN = re.compile(r'\((?P<user_id>\d{6})\)')

# End-of-roster marker family; everything from the first hit on is summary data
END_MARKER_PATTERN = re.compile(r'Flighttime\d{2}')

HEADER_PATTERN = re.compile(
    r'Individualdutyplanfor.*?'
    r'dateHdutyRdeparrACinfo'
    r'dateHdutyRdeparrACinfo'
    r'dateHdutyRdeparrACinfo'
)

OFF_PATTERN = re.compile(WEEKDAY + DAY + r'(?P<code>O_[MSVTZ])')

STANDBY_PATTERN = re.compile(
    WEEKDAY + DAY
    + r'(?P<code>STBY_S\d)'
    + r'(?P<station>[A-Z]{3})'
    + r'(?P<start>\d{4})'
    + r'(?P<end>\d{4})'
)

DUTY_BLOCK_PATTERN = re.compile(
    WEEKDAY + DAY
    + r'(?:PickUp|C/I)'
    + r'(?P<body>.*?)'
    + r'\[FDP\d{2}:\d{2}\]'
)

DEADHEAD_PREFIX = 'DH/'

FLIGHT_LEG_PATTERN = re.compile(
    r'(?P<flight>(?:DH/)?[A-Z]{2}\d{4}|\d{3})'
    r'R?'  # Reissue marker
    r'(?P<departure>[A-Z]{3})'
    + CLOCK_PAIR
    + r'(?P<arrival>[A-Z]{3})'
)
