"""
Database Dialects
=================

Immutable per-database parameter bundles.

Each dialect is a row in DIALECTS; the CSV writer and the schema
generator are parameterized by a profile instead of subclassing per
database. Adding a dialect means adding a row here and a statement
layout in sql_exporter.
"""

from dataclasses import dataclass

from .errors import MissingDialectError, UnsupportedDialectError


# =============================================================================
# CONSTANTS
# =============================================================================

DIALECT_MYSQL = "MySQL"
DIALECT_POSTGRESQL = "PostgreSQL"

# NULL representation understood by LOAD DATA INFILE and COPY ... CSV NULL '\N'
NULL_TOKEN = "\\N"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class DialectProfile:
    """Type names, quoting and NULL encoding of one target database."""
    name: str
    identifier_quote: str
    null_token: str
    int_type: str
    numeric_type: str
    default_precision: str
    varchar_type: str
    date_type: str
    time_type: str
    timestamp_type: str

    def quote_identifier(self, identifier: str) -> str:
        """
        Wrap an identifier in the dialect's quote character.

        Embedded quote characters are passed through unchanged.
        """
        return f"{self.identifier_quote}{identifier}{self.identifier_quote}"


MYSQL = DialectProfile(
    name=DIALECT_MYSQL,
    identifier_quote="`",
    null_token=NULL_TOKEN,
    int_type="int",
    numeric_type="decimal",
    default_precision="(65,30)",
    varchar_type="varchar",
    date_type="date",
    time_type="time",
    timestamp_type="datetime",
)

POSTGRESQL = DialectProfile(
    name=DIALECT_POSTGRESQL,
    identifier_quote='"',
    null_token=NULL_TOKEN,
    int_type="integer",
    numeric_type="numeric",
    default_precision="(1000,500)",
    varchar_type="varchar",
    date_type="date",
    time_type="time",
    timestamp_type="timestamp",
)

DIALECTS: dict[str, DialectProfile] = {
    DIALECT_MYSQL: MYSQL,
    DIALECT_POSTGRESQL: POSTGRESQL,
}

VALID_DIALECTS = tuple(DIALECTS)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def get_dialect(name: str | None) -> DialectProfile:
    """
    Select a built-in dialect profile by its exact name.

    Args:
        name: "MySQL" or "PostgreSQL" (case-sensitive).

    Returns:
        The matching DialectProfile.

    Raises:
        MissingDialectError: If name is None or blank.
        UnsupportedDialectError: If name is not a built-in dialect.
    """
    if name is None or not name.strip():
        raise MissingDialectError("No database dialect given.")

    try:
        return DIALECTS[name]
    except KeyError:
        raise UnsupportedDialectError(name) from None
