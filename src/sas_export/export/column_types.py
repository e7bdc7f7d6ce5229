"""
Column Type Classifier
======================

Maps a source column descriptor onto a SQL column type for a dialect.

Numeric columns carry their meaning in the display format: a date,
time or datetime format turns the stored number into a temporal type.
Formats are matched against three disjoint pattern families, checked
in the order datetime -> time -> date.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .dialects import DialectProfile


logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================

class SemanticType(str, Enum):
    """Storage class of a source column."""
    NUMERIC = "Numeric"
    CHARACTER = "Character"


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    One column of a source table, as reported by the file parser.

    byte_length <= 2 on a numeric column signals an integer-range value.
    """
    name: str
    semantic_type: SemanticType
    byte_length: int
    display_format: str | None = None
    label: str | None = None

    def __post_init__(self):
        if self.byte_length <= 0:
            raise ValueError(
                f"Column '{self.name}' must have a positive byte length, "
                f"got {self.byte_length}."
            )

    @property
    def is_numeric(self) -> bool:
        return self.semantic_type == SemanticType.NUMERIC


# =============================================================================
# CONSTANTS
# =============================================================================

# Fractional-second precision of TIME and DATETIME/TIMESTAMP columns
TEMPORAL_PRECISION = "(3)"

# Optional width and decimals, e.g. DATETIME20. or YYMMDD10 or TIME8.2
_WIDTH_SUFFIX = r"(?:\d+)?\.?(?:\d+)?"

DATETIME_FORMAT_NAMES = (
    "DATETIME", "DATEAMPM", "DTDATE", "DTMONYY", "DTWKDATX", "DTYEAR",
    "DTYYQC", "E8601DT", "B8601DT", "IS8601DT", "MDYAMPM", "NLDATM",
)

TIME_FORMAT_NAMES = (
    "TIME", "TIMEAMPM", "TOD", "HHMM", "HOUR", "MMSS", "E8601TM",
    "B8601TM", "IS8601TM", "NLTIME",
)

DATE_FORMAT_NAMES = (
    "DATE", "DAY", "DDMMYY[BCDNPS]?", "MMDDYY[BCDNPS]?", "YYMMDD[BCDNPS]?",
    "DOWNAME", "JULDAY", "JULIAN", "MMYY", "MONNAME", "MONTH", "MONYY",
    "WEEKDATE", "WEEKDATX", "WEEKDAY", "WORDDATE", "WORDDATX", "YEAR",
    "YYMM", "YYMON", "YYQ", "QTR", "E8601DA", "B8601DA", "IS8601DA",
    "NLDATE",
)


def _compile_family(names: tuple[str, ...]) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(name + _WIDTH_SUFFIX) for name in names)


DATETIME_FORMATS = _compile_family(DATETIME_FORMAT_NAMES)
TIME_FORMATS = _compile_family(TIME_FORMAT_NAMES)
DATE_FORMATS = _compile_family(DATE_FORMAT_NAMES)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def matches_family(display_format: str, family: tuple[re.Pattern, ...]) -> bool:
    """True if the whole format string matches any pattern of the family."""
    return any(pattern.fullmatch(display_format) for pattern in family)


def classify(column: ColumnDescriptor, dialect: DialectProfile) -> str:
    """
    Return the SQL column type for a source column.

    Args:
        column: The column descriptor.
        dialect: Target dialect profile.

    Returns:
        A type string such as "varchar(20)", "int" or "datetime(3)".
        Numeric columns whose format matches no family fall back to the
        dialect's numeric type with its default precision; a warning is
        logged but no error is raised.
    """
    if not column.is_numeric:
        return f"{dialect.varchar_type}({column.byte_length})"

    if column.byte_length <= 2:
        return dialect.int_type

    numeric_default = dialect.numeric_type + dialect.default_precision
    display_format = column.display_format
    if display_format is None or not display_format.strip():
        return numeric_default

    if matches_family(display_format, DATETIME_FORMATS):
        return dialect.timestamp_type + TEMPORAL_PRECISION
    if matches_family(display_format, TIME_FORMATS):
        return dialect.time_type + TEMPORAL_PRECISION
    if matches_family(display_format, DATE_FORMATS):
        return dialect.date_type

    logger.warning(
        "Couldn't determine column format, defaulting to numeric: %s\t%s",
        column.name, display_format,
    )
    return numeric_default
