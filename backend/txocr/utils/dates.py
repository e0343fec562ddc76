"""
Date/time extraction for receipt OCR text.

Rules are tried in order, most information-rich first. The first rule whose
date pattern matches wins; looser rules are never reached after that, even
if the matched values turn out to be unparseable.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Sequence

from txocr.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)

_DMY_SLASH = r'(?P<day>\d{2})/(?P<month>\d{2})/(?P<year>\d{4})'
_DMY_DASH = r'(?P<day>\d{2})-(?P<month>\d{2})-(?P<year>\d{4})'
_DMY_DOT = r'(?P<day>\d{2})\.(?P<month>\d{2})\.(?P<year>\d{4})'
_MERIDIEM = r'(?P<meridiem>a\.\s*m\.|p\.\s*m\.|AM\b|PM\b)'


@dataclass(frozen=True)
class DateTimeRule:
    """
    A date pattern, optionally paired with a time pattern searched separately.

    Receipts that print "Fecha:" and "Hora:" on different lines need the
    split form; combined date-time rules carry their time groups inline.
    """
    date: PatternSpec
    time: Optional[PatternSpec] = None

    @property
    def name(self) -> str:
        return self.date.name


LABELLED_DATE_TIME = DateTimeRule(
    date=PatternSpec(
        name='labelled_date',
        pattern=r'(?:Fecha|Techa)[\s:]*' + _DMY_SLASH,
        example='Fecha: 15/01/2026',
        notes='"Techa" is a frequent OCR misread of "Fecha"',
    ),
    time=PatternSpec(
        name='labelled_time',
        pattern=(
            r'Hora[\s:]*(?P<hour>\d{1,2}):(?P<minute>\d{2})[\s:]*(?P<second>\d{2})\s*'
            + _MERIDIEM
        ),
        example='Hora: 1:28:47 p. m.',
        notes='Allows "12:28 47" (space instead of colon before seconds)',
    ),
)

DATE_TIME_SECONDS = DateTimeRule(PatternSpec(
    name='date_time_seconds',
    pattern=(
        _DMY_SLASH
        + r'\s+(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\s*' + _MERIDIEM + r')?'
    ),
    example='15/01/2026 14:05:33',
))

DATE_TIME_MERIDIEM = DateTimeRule(PatternSpec(
    name='date_time_meridiem',
    pattern=_DMY_SLASH + r'\s+(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*' + _MERIDIEM,
    example='15/01/2026 02:05 PM',
))

DATE_TIME_24H = DateTimeRule(PatternSpec(
    name='date_time_24h',
    pattern=_DMY_SLASH + r'\s+(?P<hour>\d{1,2}):(?P<minute>\d{2})',
    example='15/01/2026 14:05',
))

DASH_DATE_TIME = DateTimeRule(PatternSpec(
    name='dash_date_time',
    pattern=_DMY_DASH + r'\s+(?P<hour>\d{1,2}):(?P<minute>\d{2})',
    example='15-01-2026 14:05',
))

DATE_ONLY = DateTimeRule(PatternSpec(
    name='date_only',
    pattern=_DMY_SLASH,
    example='15/01/2026',
))

DOTTED_DATE_TIME = DateTimeRule(PatternSpec(
    name='dotted_date_time',
    pattern=_DMY_DOT + r'\s+(?P<hour>\d{1,2}):(?P<minute>\d{2})',
    example='15.01.2026 14:05',
    notes='Some thermal printers use dots as the date separator',
))

DASH_DATE_ONLY = DateTimeRule(PatternSpec(
    name='dash_date_only',
    pattern=_DMY_DASH,
    example='15-01-2026',
))

# Payment screenshots: date anywhere, first H:MM (optionally 12-hour) anywhere
PAYMENT_DATE_TIME = DateTimeRule(
    date=PatternSpec(
        name='payment_date',
        pattern=_DMY_SLASH,
        example='15/01/2026',
    ),
    time=PatternSpec(
        name='payment_time',
        pattern=(
            r'(?<!\d)(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?'
            r'(?:\s*' + _MERIDIEM + r')?'
        ),
        example='02:35 p. m.',
    ),
)

# Store receipts: full cascade, most specific first
RECEIPT_DATETIME_RULES = (
    LABELLED_DATE_TIME,
    DATE_TIME_SECONDS,
    DATE_TIME_MERIDIEM,
    DATE_TIME_24H,
    DASH_DATE_TIME,
    DATE_ONLY,
)

# Small thermal-printer receipts: wider tolerance for low-quality text
THERMAL_DATETIME_RULES = (
    LABELLED_DATE_TIME,
    DATE_TIME_SECONDS,
    DATE_TIME_MERIDIEM,
    DATE_TIME_24H,
    DASH_DATE_TIME,
    DOTTED_DATE_TIME,
    DATE_ONLY,
    DASH_DATE_ONLY,
)


def to_24_hour(hour: int, meridiem: Optional[str]) -> int:
    """
    Convert a 12-hour clock value to 24-hour time.

    12 PM stays 12, 12 AM becomes 0. Without a marker the hour is returned as-is.
    """
    if not meridiem:
        return hour

    marker = meridiem.lower()
    if 'p' in marker and hour != 12:
        return hour + 12
    if 'a' in marker and hour == 12:
        return 0
    return hour


def parse_datetime(
    text: str,
    rules: Sequence[DateTimeRule] = RECEIPT_DATETIME_RULES
) -> Optional[datetime]:
    """
    Extract a local (naive) timestamp from receipt text.

    Args:
        text: Full OCR text
        rules: Ordered rule cascade

    Returns:
        datetime or None when no rule matches or the matched values are
        not a real calendar date/time
    """
    for rule in rules:
        match = rule.date.search(text)
        if not match:
            continue

        fields = _matched_groups(match)

        if rule.time is not None:
            time_match = rule.time.search(text)
            if time_match:
                timestamp = _build_datetime({**fields, **_matched_groups(time_match)}, rule.name)
                if timestamp is not None:
                    return timestamp
                # Bad time on a good date: keep the date at midnight
                logger.warning(f"Ignoring time matched by '{rule.time.name}'")

        return _build_datetime(fields, rule.name)

    return None


def _matched_groups(match) -> Dict[str, str]:
    return {k: v for k, v in match.groupdict().items() if v is not None}


def _build_datetime(fields: Dict[str, str], rule_name: str) -> Optional[datetime]:
    """Assemble matched groups; minutes and seconds default to 0."""
    try:
        hour = to_24_hour(int(fields.get('hour', 0)), fields.get('meridiem'))
        return datetime(
            int(fields['year']),
            int(fields['month']),
            int(fields['day']),
            hour,
            int(fields.get('minute', 0)),
            int(fields.get('second', 0)),
        )
    except ValueError as e:
        logger.warning(f"Unparseable date matched by '{rule_name}': {e}")
        return None
