"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation.
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from sas_export.app import config as app_config
from sas_export.export import ColumnDescriptor, SemanticType


# =============================================================================
# SHARED MODELS
# =============================================================================

class ColumnModel(BaseModel):
    """One column of a source table, as reported by the file parser."""

    name: str = Field(..., min_length=1)
    type: Literal["Numeric", "Character"] = Field(
        ...,
        description="Storage class of the column"
    )
    length: int = Field(
        ...,
        gt=0,
        description="Byte length; numeric columns of length <= 2 hold integers"
    )
    format: Optional[str] = Field(
        default=None,
        description="Display format name, e.g. YYMMDD, DATETIME, TIME"
    )
    label: Optional[str] = Field(
        default=None,
        description="Human-readable description, exported as a SQL comment"
    )

    def to_descriptor(self) -> ColumnDescriptor:
        return ColumnDescriptor(
            name=self.name,
            semantic_type=SemanticType(self.type),
            byte_length=self.length,
            display_format=self.format,
            label=self.label,
        )


class TableModel(BaseModel):
    """A table name and its column catalog."""

    name: str = Field(..., min_length=1)
    columns: list[ColumnModel] = Field(default_factory=list)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CsvExportRequest(BaseModel):
    """Request body for POST /export/csv endpoint."""

    table: str = Field(..., min_length=1, description="Table name, used as file name")
    columns: list[ColumnModel] = Field(..., min_length=1)
    rows: list[Optional[list[Any]]] = Field(
        default_factory=list,
        description="Row values aligned with columns; a null row ends the stream"
    )
    dialect: Optional[str] = Field(
        default=None,
        description="'MySQL' or 'PostgreSQL'; omit for plain CSV"
    )
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    endline: Literal["\n", "\r\n"] = "\n"
    include_header: bool = True


class SchemaExportRequest(BaseModel):
    """Request body for POST /export/schema endpoint."""

    dialect: str = Field(default=app_config.DEFAULT_DIALECT)
    schema_name: str = Field(..., description="Name of the database to create")
    engine: str = Field(default=app_config.DEFAULT_ENGINE, description="MySQL storage engine")
    charset: str = Field(default=app_config.DEFAULT_CHARSET)
    collation: str = Field(default=app_config.DEFAULT_COLLATION)
    tables: list[TableModel] = Field(default_factory=list)


class MetadataRequest(BaseModel):
    """Request body for POST /export/metadata endpoint."""

    columns: list[ColumnModel] = Field(..., min_length=1)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class CsvExportResponse(BaseModel):
    """Response for POST /export/csv."""

    status: Literal["success"] = "success"
    run_id: str
    file: str
    rows: int


class SchemaExportResponse(BaseModel):
    """Response for POST /export/schema."""

    status: Literal["success"] = "success"
    run_id: str
    file: str
    tables: int
    script: str


class MetadataResponse(BaseModel):
    """Response for POST /export/metadata."""

    status: Literal["success"] = "success"
    csv: str


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "ok"


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str
    name: str = "SAS Export"


class ErrorResponse(BaseModel):
    """Standard error response."""

    status: str = "error"
    message: str
    detail: Optional[str] = None
