"""
Export Module
=============

Dialect-aware export engine.
Converts a source column catalog and row stream into CSV for bulk
loading and a SQL DDL script for MySQL or PostgreSQL.

This is a pure text-emitting layer: it never connects to a database.
"""

from .errors import (
    ConfigurationError,
    MissingDialectError,
    UnsupportedDialectError,
    ExportIOError,
    CatalogIOError,
)

from .dialects import (
    DialectProfile,
    get_dialect,
    MYSQL,
    POSTGRESQL,
    VALID_DIALECTS,
)

from .column_types import (
    ColumnDescriptor,
    SemanticType,
    classify,
)

from .value_formatter import (
    decode_characters,
    format_date,
    format_time_of_day,
    format_number,
)

from .catalog import (
    TableSource,
    discover_tables,
    open_table,
)

from .csv_exporter import (
    CsvRowWriter,
    export_table_to_csv,
)

from .sql_exporter import (
    SchemaGenerator,
    SchemaOptions,
    SchemaStateError,
    generate_schema_script,
    export_schema_to_sql,
)

from .metadata_exporter import write_metadata

from .export_validators import (
    validate_csv_export,
    validate_sql_export,
    ExportValidationError,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "MissingDialectError",
    "UnsupportedDialectError",
    "ExportIOError",
    "CatalogIOError",

    # Dialects
    "DialectProfile",
    "get_dialect",
    "MYSQL",
    "POSTGRESQL",
    "VALID_DIALECTS",

    # Columns
    "ColumnDescriptor",
    "SemanticType",
    "classify",

    # Values
    "decode_characters",
    "format_date",
    "format_time_of_day",
    "format_number",

    # Catalog
    "TableSource",
    "discover_tables",
    "open_table",

    # CSV
    "CsvRowWriter",
    "export_table_to_csv",
    "write_metadata",

    # SQL
    "SchemaGenerator",
    "SchemaOptions",
    "SchemaStateError",
    "generate_schema_script",
    "export_schema_to_sql",

    # Validation
    "validate_csv_export",
    "validate_sql_export",
    "ExportValidationError",
]
