"""
Metadata Exporter
=================

Writes the column catalog of a table as CSV, one line per column.
"""

from typing import Sequence, TextIO

from .column_types import ColumnDescriptor
from .csv_exporter import DEFAULT_DELIMITER, DEFAULT_ENDLINE, quote_minimal
from .errors import ExportIOError


# =============================================================================
# CONSTANTS
# =============================================================================

METADATA_HEADER = ("Number", "Name", "Type", "Data Length", "Format", "Label")


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def metadata_rows(columns: Sequence[ColumnDescriptor]) -> list[list[str]]:
    """Describe each column as [number, name, type, length, format, label]."""
    return [
        [
            str(number),
            column.name,
            column.semantic_type.value,
            str(column.byte_length),
            column.display_format or "",
            column.label or "",
        ]
        for number, column in enumerate(columns, start=1)
    ]


def write_metadata(
    sink: TextIO,
    columns: Sequence[ColumnDescriptor],
    delimiter: str = DEFAULT_DELIMITER,
    endline: str = DEFAULT_ENDLINE
) -> None:
    """
    Write the metadata CSV for a column catalog.

    Raises:
        ExportIOError: If the sink cannot be written.
    """
    lines = [list(METADATA_HEADER)] + metadata_rows(columns)
    try:
        for line in lines:
            sink.write(delimiter.join(quote_minimal(v, delimiter) for v in line) + endline)
        sink.flush()
    except (OSError, ValueError) as e:
        raise ExportIOError(f"Failed to write metadata output: {e}") from e
