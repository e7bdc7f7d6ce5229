"""
Export Validators
=================

Validates exported files for correctness.
Performs sanity checks on CSV and SQL outputs.
"""

import csv
import re
from pathlib import Path

from .sql_exporter import STATEMENT_END


# Single-quoted SQL literal, with doubled quotes inside
_SQL_STRING_LITERAL = re.compile(r"'(?:[^']|'')*'")


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ExportValidationError(Exception):
    """Raised when export validation fails."""
    pass


# =============================================================================
# CSV VALIDATION
# =============================================================================

def validate_csv_export(
    file_path: str,
    expected_rows: int | None = None,
    delimiter: str = ",",
    has_header: bool = True
) -> bool:
    """
    Validate a CSV file is readable, has a header and the expected row count.

    Args:
        file_path: Path to the CSV file.
        expected_rows: Optional number of data rows (header excluded).
        delimiter: Field separator used when writing.
        has_header: Whether the first record is the column names.

    Returns:
        True if the file is valid.

    Raises:
        ExportValidationError: If validation fails.
    """
    path = Path(file_path)
    if not path.exists():
        raise ExportValidationError(f"CSV file not found: {file_path}")

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f, delimiter=delimiter))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ExportValidationError(f"Failed to read CSV {file_path}: {e}") from e

    if has_header:
        if len(rows) == 0:
            raise ExportValidationError(f"CSV file is empty: {file_path}")
        if not rows[0]:
            raise ExportValidationError(f"CSV has empty header: {file_path}")
        data_rows = rows[1:]
    else:
        data_rows = rows

    # Every record must have the header's width; a blank line is one empty field
    if has_header:
        width = len(rows[0])
        for number, row in enumerate(data_rows, start=2):
            field_count = len(row) if row else 1
            if field_count != width:
                raise ExportValidationError(
                    f"CSV {path.stem} record {number} has {field_count} fields, "
                    f"expected {width}"
                )

    if expected_rows is not None and len(data_rows) != expected_rows:
        raise ExportValidationError(
            f"CSV {path.stem} has {len(data_rows)} rows, expected {expected_rows}"
        )

    return True


# =============================================================================
# SQL VALIDATION
# =============================================================================

def validate_sql_export(file_path: str, require_tables: bool = True) -> bool:
    """
    Validate SQL file has basic structure and syntax.

    Performs lightweight checks:
    - File exists and is non-empty
    - Contains a CREATE DATABASE statement
    - Contains CREATE TABLE statements (unless require_tables is False)
    - Balanced parentheses in every CREATE TABLE

    Args:
        file_path: Path to SQL file.
        require_tables: Fail if the script creates no table.

    Returns:
        True if file passes basic validation.

    Raises:
        ExportValidationError: If validation fails.
    """
    path = Path(file_path)

    if not path.exists():
        raise ExportValidationError(f"SQL file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ExportValidationError(f"Failed to read SQL {file_path}: {e}") from e

    if not content.strip():
        raise ExportValidationError(f"SQL file is empty: {file_path}")

    if "CREATE DATABASE" not in content.upper():
        raise ExportValidationError(f"SQL file has no CREATE DATABASE: {file_path}")

    if require_tables and "CREATE TABLE" not in content.upper():
        raise ExportValidationError(f"SQL file has no CREATE TABLE: {file_path}")

    # Basic syntax check: balanced parentheses in CREATE TABLE
    for statement in content.split(STATEMENT_END):
        if not statement.lstrip().upper().startswith("CREATE TABLE"):
            continue
        code = _SQL_STRING_LITERAL.sub("''", statement)
        open_parens = code.count("(")
        close_parens = code.count(")")
        if open_parens != close_parens:
            raise ExportValidationError(
                f"Unbalanced parentheses in CREATE TABLE: {file_path}"
            )

    return True
