"""
CSV Exporter
============

Streams source rows to CSV for bulk database loading.

Quoting and NULL encoding depend on whether a dialect is configured:

- with a dialect, every non-null text field is quoted and NULL is written
  as the dialect's NULL token, unquoted;
- without one ("plain" mode), fields are quoted only when they hold the
  delimiter, a quote, or a line break / tab, and NULL is an empty field.

Embedded quotes are doubled in both modes.
"""

import logging
import math
from datetime import date, time
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence, TextIO

from .catalog import TableSource
from .column_types import ColumnDescriptor
from .dialects import DialectProfile
from .errors import ExportIOError
from .value_formatter import (
    INFINITY_STRING,
    TIME_FORMAT_STRINGS,
    decode_characters,
    format_date,
    format_number,
    format_time_of_day,
    number_text,
    seconds_since_midnight,
)


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_DELIMITER = ","
DEFAULT_ENDLINE = "\n"
QUOTE = '"'

# Characters besides the delimiter that force quoting in plain mode
SPECIAL_CHARACTERS = ("\n", "\t", "\r", QUOTE)


# =============================================================================
# QUOTE AND NULL POLICIES
# =============================================================================

QuotePolicy = Callable[[str, str], str]


def _double_quotes(text: str) -> str:
    return text.replace(QUOTE, QUOTE + QUOTE)


def quote_minimal(text: str, delimiter: str) -> str:
    """Quote only text that would otherwise break the CSV structure."""
    escaped = _double_quotes(text)
    if escaped and (delimiter in text or any(c in text for c in SPECIAL_CHARACTERS)):
        return QUOTE + escaped + QUOTE
    return escaped


def quote_always(text: str, delimiter: str) -> str:
    """Quote every text field, so that "" stays distinct from NULL."""
    return QUOTE + _double_quotes(text) + QUOTE


def quote_policy_for(dialect: DialectProfile | None) -> QuotePolicy:
    return quote_always if dialect is not None else quote_minimal


def null_field_for(dialect: DialectProfile | None) -> str:
    return dialect.null_token if dialect is not None else ""


# =============================================================================
# ENTRY FORMATTING
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_entry(column: ColumnDescriptor, value: Any) -> str | None:
    """
    Text form of a non-character, non-null value.

    Returns None for the infinity sentinel, which must produce an empty
    cell.
    """
    raw_text = number_text(value) if _is_number(value) else str(value)
    if INFINITY_STRING in raw_text:
        return None

    if isinstance(value, date):
        return format_date(value, column.display_format)
    if isinstance(value, time):
        return format_time_of_day(seconds_since_midnight(value))
    if _is_number(value):
        if column.display_format in TIME_FORMAT_STRINGS and not (
            isinstance(value, float) and math.isnan(value)
        ):
            return format_time_of_day(value)
        return format_number(value)
    return raw_text


# =============================================================================
# WRITER
# =============================================================================

class CsvRowWriter:
    """
    Writes a header and rows of one table to a text sink.

    Args:
        sink: Writable text stream. The writer flushes it after every row
            but never closes it.
        delimiter: Field separator.
        endline: Row terminator.
        dialect: Target database; None selects plain mode.
    """

    def __init__(
        self,
        sink: TextIO,
        delimiter: str = DEFAULT_DELIMITER,
        endline: str = DEFAULT_ENDLINE,
        dialect: DialectProfile | None = None
    ):
        if not delimiter:
            raise ValueError("CSV delimiter must not be empty.")
        self.sink = sink
        self.delimiter = delimiter
        self.endline = endline
        self.dialect = dialect
        self._quote = quote_policy_for(dialect)
        self._null_field = null_field_for(dialect)

    def _emit(self, text: str, flush: bool = False) -> None:
        try:
            self.sink.write(text)
            if flush:
                self.sink.flush()
        except (OSError, ValueError) as e:
            raise ExportIOError(f"Failed to write CSV output: {e}") from e

    def render_cell(self, column: ColumnDescriptor, value: Any) -> str:
        """
        Text of one cell, quoted by the active policy.

        Only a None value becomes the NULL field. Values whose formatted
        text is empty, such as the epoch-zero "no date", are written as
        empty text: `""` under a dialect, not the dialect's NULL token.
        The infinity sentinel is the exception and always gives an empty
        unquoted cell.
        """
        if value is None:
            return self._null_field
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self._quote(decode_characters(value), self.delimiter)
        if isinstance(value, str):
            return self._quote(value, self.delimiter)

        text = format_entry(column, value)
        if text is None:
            return ""
        return self._quote(text, self.delimiter)

    def write_header(self, columns: Sequence[ColumnDescriptor]) -> None:
        """Write the column names as the first line."""
        names = [self._quote(column.name, self.delimiter) for column in columns]
        self._emit(self.delimiter.join(names) + self.endline)

    def write_row(self, columns: Sequence[ColumnDescriptor], row: Sequence[Any] | None) -> None:
        """
        Write one row. A None row is ignored.

        Raises:
            ValueError: If the row is shorter than the column list.
            ExportIOError: If the sink cannot be written.
        """
        if row is None:
            return
        if len(row) < len(columns):
            raise ValueError(
                f"Row has {len(row)} values but the table has {len(columns)} columns."
            )

        cells = [self.render_cell(column, row[i]) for i, column in enumerate(columns)]
        self._emit(self.delimiter.join(cells) + self.endline, flush=True)

    def write_rows(
        self,
        columns: Sequence[ColumnDescriptor],
        rows: Iterable[Sequence[Any] | None]
    ) -> int:
        """
        Write rows until the stream ends or yields None.

        Returns:
            Number of rows written.
        """
        count = 0
        for row in rows:
            if row is None:
                break
            self.write_row(columns, row)
            count += 1
        return count


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_table_to_csv(
    source: TableSource,
    file_path: str | Path,
    dialect: DialectProfile | None = None,
    delimiter: str = DEFAULT_DELIMITER,
    endline: str = DEFAULT_ENDLINE,
    include_header: bool = True
) -> int:
    """
    Export one table to a UTF-8 CSV file.

    The file is closed on every exit path; rows written before a failure
    stay in place.

    Args:
        source: Table name, columns and row stream.
        file_path: Output file, created or overwritten.
        dialect: Target database, or None for plain CSV.
        delimiter: Field separator.
        endline: Row terminator.
        include_header: Write the column names first.

    Returns:
        Number of data rows written.

    Raises:
        ExportIOError: If the file cannot be opened, written or closed, or
            reading the row stream fails with an OSError.
    """
    path = Path(file_path)
    try:
        f = open(path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise ExportIOError(f"Failed to open {path}: {e}") from e

    try:
        with f:
            writer = CsvRowWriter(f, delimiter=delimiter, endline=endline, dialect=dialect)
            if include_header:
                writer.write_header(source.columns)
            count = writer.write_rows(source.columns, source.rows)
    except OSError as e:
        raise ExportIOError(f"Failed to export table {source.name} to {path}: {e}") from e

    logger.info("Wrote %d rows of table %s to %s", count, source.name, path)
    return count
