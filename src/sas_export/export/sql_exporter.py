"""
SQL Schema Exporter
===================

Generates a DDL script that creates a database and one table per source
table, for MySQL or PostgreSQL.

Statement layouts differ per dialect:

- MySQL: CREATE DATABASE + USE, CREATE TABLE IF NOT EXISTS with inline
  column comments and an ENGINE / CHARACTER SET / COLLATE clause.
- PostgreSQL: CREATE DATABASE ... WITH LC_COLLATE ... LC_CHARSET ...,
  CREATE TABLE followed by one COMMENT ON COLUMN per labelled column.

Identifiers are wrapped in the dialect quote character; embedded quote
characters are not escaped. Labels are written verbatim.
"""

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Sequence, TextIO

from .catalog import TableSource
from .column_types import ColumnDescriptor, classify
from .dialects import DIALECT_MYSQL, DIALECT_POSTGRESQL, DialectProfile
from .errors import ConfigurationError, ExportIOError


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class SchemaStateError(Exception):
    """Raised when statements are emitted out of order."""
    pass


# =============================================================================
# CONSTANTS
# =============================================================================

ENGINE_INNODB = "InnoDB"
CHARSET_LATIN1 = "latin1"
COLLATION_LATIN1_BIN = "latin1_bin"

LINE_SEPARATOR = "\n"
STATEMENT_END = ";" + LINE_SEPARATOR + LINE_SEPARATOR
COLUMN_SEPARATOR = "," + LINE_SEPARATOR


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class SchemaOptions:
    """Database-level settings of a schema export."""
    schema: str
    engine: str = ENGINE_INNODB
    charset: str = CHARSET_LATIN1
    collation: str = COLLATION_LATIN1_BIN

    def __post_init__(self):
        if self.schema is None or not self.schema.strip():
            raise ConfigurationError("A database schema name is required.")


class GeneratorState(str, Enum):
    START = "start"
    SCHEMA_EMITTED = "schema_emitted"
    TABLE_EMITTED = "table_emitted"
    DONE = "done"


# =============================================================================
# STATEMENT LAYOUTS
# =============================================================================

def _has_label(column: ColumnDescriptor) -> bool:
    return bool(column.label and column.label.strip())


def _column_clause(column: ColumnDescriptor, dialect: DialectProfile) -> str:
    return (
        f" {dialect.quote_identifier(column.name)} "
        f"{classify(column, dialect)} NULL DEFAULT NULL"
    )


def _mysql_schema_statements(dialect: DialectProfile, options: SchemaOptions) -> list[str]:
    schema = dialect.quote_identifier(options.schema)
    return [f"CREATE DATABASE {schema}", f"USE {schema}"]


def _mysql_table_statements(
    dialect: DialectProfile,
    options: SchemaOptions,
    table_name: str,
    columns: Sequence[ColumnDescriptor]
) -> list[str]:
    clauses = []
    for column in columns:
        clause = _column_clause(column, dialect)
        if _has_label(column):
            clause += f" COMMENT '{column.label}'"
        clauses.append(clause)

    return [
        f"CREATE TABLE IF NOT EXISTS {dialect.quote_identifier(table_name)} ("
        + LINE_SEPARATOR
        + COLUMN_SEPARATOR.join(clauses)
        + f") ENGINE='{options.engine}' CHARACTER SET {options.charset}"
        + f" COLLATE {options.collation}"
    ]


def _postgresql_schema_statements(dialect: DialectProfile, options: SchemaOptions) -> list[str]:
    return [
        f"CREATE DATABASE {dialect.quote_identifier(options.schema)}"
        f" WITH LC_COLLATE {options.collation} LC_CHARSET {options.charset}"
    ]


def _postgresql_table_statements(
    dialect: DialectProfile,
    options: SchemaOptions,
    table_name: str,
    columns: Sequence[ColumnDescriptor]
) -> list[str]:
    clauses = [_column_clause(column, dialect) for column in columns]
    statements = [
        f"CREATE TABLE {dialect.quote_identifier(table_name)} ("
        + LINE_SEPARATOR
        + COLUMN_SEPARATOR.join(clauses)
        + ")"
    ]

    qualified_table = (
        f"{dialect.quote_identifier(options.schema)}."
        f"{dialect.quote_identifier(table_name)}"
    )
    for column in columns:
        if _has_label(column):
            statements.append(
                f"COMMENT ON COLUMN {qualified_table}."
                f"{dialect.quote_identifier(column.name)} IS '{column.label}'"
            )
    return statements


SchemaLayout = Callable[[DialectProfile, SchemaOptions], list[str]]
TableLayout = Callable[[DialectProfile, SchemaOptions, str, Sequence[ColumnDescriptor]], list[str]]

STATEMENT_LAYOUTS: dict[str, tuple[SchemaLayout, TableLayout]] = {
    DIALECT_MYSQL: (_mysql_schema_statements, _mysql_table_statements),
    DIALECT_POSTGRESQL: (_postgresql_schema_statements, _postgresql_table_statements),
}


# =============================================================================
# GENERATOR
# =============================================================================

class SchemaGenerator:
    """
    Emits the DDL of one export run to a text sink.

    Lifecycle: emit_schema() once, emit_table() per table, finish().
    """

    def __init__(self, dialect: DialectProfile, options: SchemaOptions, sink: TextIO):
        if dialect.name not in STATEMENT_LAYOUTS:
            raise ConfigurationError(f"No statement layout for dialect: {dialect.name}")
        self.dialect = dialect
        self.options = options
        self.sink = sink
        self.state = GeneratorState.START
        self.tables_emitted = 0
        self._schema_layout, self._table_layout = STATEMENT_LAYOUTS[dialect.name]

    def _write_statements(self, statements: list[str]) -> None:
        try:
            for statement in statements:
                self.sink.write(statement + STATEMENT_END)
            self.sink.flush()
        except (OSError, ValueError) as e:
            raise ExportIOError(f"Failed to write SQL script: {e}") from e

    def emit_schema(self) -> None:
        """Write the CREATE DATABASE statement(s)."""
        if self.state != GeneratorState.START:
            raise SchemaStateError(f"Schema statement already emitted (state: {self.state.value}).")
        self._write_statements(self._schema_layout(self.dialect, self.options))
        self.state = GeneratorState.SCHEMA_EMITTED

    def emit_table(self, table_name: str, columns: Sequence[ColumnDescriptor]) -> None:
        """Write the CREATE TABLE statement (and comments) for one table."""
        if self.state not in (GeneratorState.SCHEMA_EMITTED, GeneratorState.TABLE_EMITTED):
            raise SchemaStateError(f"Cannot emit table in state: {self.state.value}.")
        self._write_statements(
            self._table_layout(self.dialect, self.options, table_name, columns)
        )
        self.tables_emitted += 1
        self.state = GeneratorState.TABLE_EMITTED

    def finish(self) -> None:
        if self.state == GeneratorState.START:
            raise SchemaStateError("Cannot finish before the schema statement is emitted.")
        self.state = GeneratorState.DONE

    def run(self, tables: Iterable[TableSource]) -> int:
        """
        Emit the full script for a sequence of tables.

        Returns:
            Number of tables emitted.
        """
        self.emit_schema()
        for table in tables:
            logger.info("Adding table %s (%d columns)", table.name, len(table.columns))
            self.emit_table(table.name, table.columns)
        self.finish()
        return self.tables_emitted


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def generate_schema_script(
    tables: Iterable[TableSource],
    dialect: DialectProfile,
    options: SchemaOptions
) -> str:
    """Return the DDL script for the given tables as a string."""
    buffer = io.StringIO()
    SchemaGenerator(dialect, options, buffer).run(tables)
    return buffer.getvalue()


def export_schema_to_sql(
    tables: Iterable[TableSource],
    file_path: str | Path,
    dialect: DialectProfile,
    options: SchemaOptions
) -> int:
    """
    Write the DDL script for the given tables to a UTF-8 file.

    Returns:
        Number of tables written.

    Raises:
        ExportIOError: If the file cannot be opened, written or closed.
        CatalogIOError: If the table catalog cannot be listed.
    """
    path = Path(file_path)
    try:
        f = open(path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise ExportIOError(f"Failed to open {path}: {e}") from e

    try:
        with f:
            count = SchemaGenerator(dialect, options, f).run(tables)
    except OSError as e:
        raise ExportIOError(f"Failed to export schema {options.schema} to {path}: {e}") from e

    logger.info("Wrote schema %s with %d tables to %s", options.schema, count, path)
    return count
