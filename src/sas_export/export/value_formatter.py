"""
Value Formatter
===============

Canonical text forms for typed cell values.

Pure functions with no I/O. Dates are rendered in UTC, numbers are
rounded to a fixed number of significant digits once their text form
gets long, and infinity is suppressed entirely.
"""

import math
import re
from datetime import date, datetime, time, timezone
from decimal import Context, Decimal, ROUND_HALF_UP


# =============================================================================
# CONSTANTS
# =============================================================================

# Encoding of raw character data in the source files
CHARACTER_ENCODING = "cp1252"

# Text forms longer than this are rounded
ROUNDING_LENGTH = 13

# Significant digits kept when rounding
ACCURACY = 15

# Marker of the infinity sentinel in a value's text form
INFINITY_STRING = "Infinity"

SECONDS_IN_MINUTE = 60
MINUTES_IN_HOUR = 60
SECONDS_IN_HOUR = SECONDS_IN_MINUTE * MINUTES_IN_HOUR

# Display format -> output template
DATE_OUTPUT_TEMPLATES: dict[str, str] = {
    "YYMMDD": "yyyy-MM-dd",
    "YYMMDDN": "yyyyMMdd",
    "YYMMDDB": "yyyy MM dd",
    "YYMMDDC": "yyyy:MM:dd",
    "YYMMDDD": "yyyy-MM-dd",
    "YYMMDDP": "yyyy.MM.dd",
    "YYMMDDS": "yyyy/MM/dd",
    "MMDDYY": "MM/dd/yyyy",
    "DDMMYY": "dd/MM/yyyy",
    "DATE": "ddMMMyyyy",
    "DATETIME": "yyyy-MM-dd HH:mm:ss",
}

# Numeric columns with these formats hold seconds since midnight
TIME_FORMAT_STRINGS = frozenset({"TIME", "HHMM"})

# Used for date values whose column format has no template
FALLBACK_DATE_TEMPLATE = "yyyy-MM-dd"
FALLBACK_DATETIME_TEMPLATE = "yyyy-MM-dd HH:mm:ss"

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_TEMPLATE_TOKEN = re.compile(r"yyyy|MMM|MM|dd|HH|mm|ss")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ROUNDING_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)


# =============================================================================
# CHARACTER DATA
# =============================================================================

def decode_characters(raw: bytes) -> str:
    """Decode a raw character value with the fixed Western code page."""
    return bytes(raw).decode(CHARACTER_ENCODING, errors="replace")


# =============================================================================
# DATES AND TIMES
# =============================================================================

def _as_utc(value: date) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def _render_template(moment: datetime, template: str) -> str:
    fields = {
        "yyyy": f"{moment.year:04d}",
        "MMM": MONTH_ABBREVIATIONS[moment.month - 1],
        "MM": f"{moment.month:02d}",
        "dd": f"{moment.day:02d}",
        "HH": f"{moment.hour:02d}",
        "mm": f"{moment.minute:02d}",
        "ss": f"{moment.second:02d}",
    }
    return _TEMPLATE_TOKEN.sub(lambda match: fields[match.group(0)], template)


def format_date(value: date, display_format: str | None) -> str:
    """
    Render a date or datetime with the template of its display format.

    Args:
        value: A date or datetime. Naive datetimes are taken as UTC.
        display_format: One of the DATE_OUTPUT_TEMPLATES keys (exact,
            case-sensitive). Unknown formats fall back to ISO-style
            date or date-time rendering.

    Returns:
        The rendered text, or "" for the epoch-zero "no date" value.
    """
    moment = _as_utc(value)
    if moment == _EPOCH:
        return ""

    template = DATE_OUTPUT_TEMPLATES.get(display_format or "")
    if template is None:
        if isinstance(value, datetime):
            template = FALLBACK_DATETIME_TEMPLATE
        else:
            template = FALLBACK_DATE_TEMPLATE
    return _render_template(moment, template)


def format_time_of_day(seconds_from_midnight: int) -> str:
    """
    Render seconds since midnight as HH:MM:SS.

    Values of a day or more keep counting hours past 23.
    """
    seconds = int(seconds_from_midnight)
    hours = seconds // SECONDS_IN_HOUR
    minutes = seconds // SECONDS_IN_MINUTE % MINUTES_IN_HOUR
    return f"{hours:02d}:{minutes:02d}:{seconds % SECONDS_IN_MINUTE:02d}"


def seconds_since_midnight(value: time) -> int:
    """Convert a time of day to whole seconds since midnight."""
    return value.hour * SECONDS_IN_HOUR + value.minute * SECONDS_IN_MINUTE + value.second


# =============================================================================
# NUMBERS
# =============================================================================

def number_text(value: int | float) -> str:
    """Unrounded text form of a number; infinities render as [-]Infinity."""
    if isinstance(value, float):
        if math.isinf(value):
            return INFINITY_STRING if value > 0 else f"-{INFINITY_STRING}"
        return repr(value)
    return str(value)


def _trim_zeros_from_end(text: str) -> str:
    if "." not in text or "e" in text or "E" in text:
        return text
    return text.rstrip("0").rstrip(".")


def _round_significant(value: float) -> str:
    length_before_dot = math.ceil(math.log10(abs(value)))
    exponent = Decimal(1).scaleb(-(ACCURACY - length_before_dot))
    rounded = float(Decimal(value).quantize(exponent, context=_ROUNDING_CONTEXT))
    # Rounding up near the float maximum overflows to inf
    if math.isinf(rounded):
        return repr(value)
    return repr(rounded)


def format_number(value: int | float) -> str | None:
    """
    Render a number as decimal text.

    Floats whose text form is longer than ROUNDING_LENGTH characters are
    rounded half-up to ACCURACY significant digits. Trailing fractional
    zeros and a dangling decimal point are removed.

    Returns:
        The text, or None when the value is the infinity sentinel and must
        not be written at all.
    """
    text = number_text(value)
    if INFINITY_STRING in text:
        return None

    if isinstance(value, float) and len(text) > ROUNDING_LENGTH and math.isfinite(value):
        text = _round_significant(value)
    return _trim_zeros_from_end(text)
