"""
API Module
==========

API routes and schemas.
"""

from .schemas import (
    ColumnModel,
    TableModel,
    CsvExportRequest,
    CsvExportResponse,
    SchemaExportRequest,
    SchemaExportResponse,
    MetadataRequest,
    MetadataResponse,
    HealthResponse,
    VersionResponse,
    ErrorResponse,
)

__all__ = [
    "ColumnModel",
    "TableModel",
    "CsvExportRequest",
    "CsvExportResponse",
    "SchemaExportRequest",
    "SchemaExportResponse",
    "MetadataRequest",
    "MetadataResponse",
    "HealthResponse",
    "VersionResponse",
    "ErrorResponse",
]
