"""
API Routes
==========

Endpoint definitions for the SAS Export API.

The file parser runs on the client side: requests carry the column
catalog (and rows) it produced. This module decodes JSON values into
the engine's value types and orchestrates the exporters without adding
formatting logic of its own.
"""

import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

from fastapi import APIRouter

from .schemas import (
    CsvExportRequest,
    CsvExportResponse,
    SchemaExportRequest,
    SchemaExportResponse,
    MetadataRequest,
    MetadataResponse,
    HealthResponse,
    VersionResponse,
)

from sas_export.export import (
    ColumnDescriptor,
    SchemaOptions,
    TableSource,
    get_dialect,
    export_table_to_csv,
    export_schema_to_sql,
    write_metadata,
    validate_csv_export,
    validate_sql_export,
)
from sas_export.export.column_types import DATE_FORMATS, DATETIME_FORMATS, matches_family
from sas_export.export.value_formatter import INFINITY_STRING

from sas_export.app import config as app_config
from sas_export.app import exceptions as app_exceptions
from sas_export.app import artifact_writer


logger = logging.getLogger(__name__)


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter()


# =============================================================================
# VALUE DECODING
# =============================================================================

def _safe_file_name(name: str, suffix: str) -> str:
    """Reject names that would escape the output directory."""
    if Path(name).name != name or name in (".", ".."):
        raise ValueError(f"Invalid output name: '{name}'.")
    return f"{name}{suffix}"


def _parse_temporal(text: str) -> date:
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text)


def decode_json_value(column: ColumnDescriptor, value: Any) -> Any:
    """
    Convert a JSON cell into the value type the file parser would produce.

    Character values pass through. In numeric columns, ISO strings become
    dates or datetimes when the column has a date-like format, and
    "Infinity" / "-Infinity" become float infinities.
    """
    if value is None or not column.is_numeric or not isinstance(value, str):
        return value

    if value in (INFINITY_STRING, f"-{INFINITY_STRING}"):
        return float(value)

    display_format = column.display_format or ""
    if matches_family(display_format, DATETIME_FORMATS) or matches_family(display_format, DATE_FORMATS):
        return _parse_temporal(value)

    return float(value)


def _decoded_rows(columns: list[ColumnDescriptor], rows: list[list[Any] | None]):
    for row in rows:
        if row is None:
            yield None
            continue
        yield [decode_json_value(column, value) for column, value in zip(columns, row)]


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/export/csv", response_model=CsvExportResponse)
def export_csv(request: CsvExportRequest) -> CsvExportResponse:
    """
    Export one table to CSV in the output directory.

    Without a dialect the file uses plain minimal quoting and empty NULLs;
    with one, text is always quoted and NULL is written as the dialect's
    NULL token.
    """
    try:
        run_id = artifact_writer.get_run_id()
        dialect = get_dialect(request.dialect) if request.dialect is not None else None
        logger.info("Run %s: exporting table %s to CSV", run_id, request.table)

        columns = [column.to_descriptor() for column in request.columns]
        source = TableSource(
            name=request.table,
            columns=columns,
            rows=_decoded_rows(columns, request.rows),
        )

        file_path = Path(app_config.get_output_dir()) / _safe_file_name(request.table, ".csv")
        count = export_table_to_csv(
            source,
            file_path,
            dialect=dialect,
            delimiter=request.delimiter,
            endline=request.endline,
            include_header=request.include_header,
        )

        validate_csv_export(
            str(file_path),
            expected_rows=count,
            delimiter=request.delimiter,
            has_header=request.include_header,
        )

        artifact_writer.write_export_manifest(run_id, "csv", {
            "table": request.table,
            "dialect": dialect.name if dialect else None,
            "file": str(file_path),
            "rows": count
        })

        return CsvExportResponse(run_id=run_id, file=str(file_path), rows=count)

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.post("/export/schema", response_model=SchemaExportResponse)
def export_schema(request: SchemaExportRequest) -> SchemaExportResponse:
    """Export the DDL script creating the database and its tables."""
    try:
        run_id = artifact_writer.get_run_id()
        logger.info("Run %s: exporting schema %s", run_id, request.schema_name)
        dialect = get_dialect(request.dialect)
        options = SchemaOptions(
            schema=request.schema_name,
            engine=request.engine,
            charset=request.charset,
            collation=request.collation,
        )
        tables = [
            TableSource(
                name=table.name,
                columns=[column.to_descriptor() for column in table.columns],
            )
            for table in request.tables
        ]

        file_path = Path(app_config.get_output_dir()) / _safe_file_name(request.schema_name, ".sql")
        count = export_schema_to_sql(tables, file_path, dialect, options)
        validate_sql_export(str(file_path), require_tables=count > 0)

        artifact_writer.write_export_manifest(run_id, "schema", {
            "schema": request.schema_name,
            "dialect": dialect.name,
            "file": str(file_path),
            "tables": [table.name for table in tables]
        })

        return SchemaExportResponse(
            run_id=run_id,
            file=str(file_path),
            tables=count,
            script=file_path.read_text(encoding="utf-8"),
        )

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.post("/export/metadata", response_model=MetadataResponse)
def export_metadata(request: MetadataRequest) -> MetadataResponse:
    """Describe a column catalog as CSV."""
    try:
        buffer = io.StringIO()
        write_metadata(buffer, [column.to_descriptor() for column in request.columns])
        return MetadataResponse(csv=buffer.getvalue())

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
