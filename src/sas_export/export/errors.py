"""
Export Errors
=============

Exception taxonomy shared by the export engine.

Formatting functions never raise these; they are raised by the writers,
the schema generator, and the table catalog.
"""


# =============================================================================
# CONFIGURATION
# =============================================================================

class ConfigurationError(Exception):
    """Raised before any output is produced when the export is misconfigured."""
    pass


class MissingDialectError(ConfigurationError):
    """Raised when no database dialect name is given."""
    pass


class UnsupportedDialectError(ConfigurationError):
    """Raised when the dialect name is not one of the built-in profiles."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported dialect: {name}")


# =============================================================================
# I/O
# =============================================================================

class ExportIOError(Exception):
    """Raised when the output sink cannot be written, flushed or closed."""
    pass


class CatalogIOError(Exception):
    """Raised when a source table cannot be listed or opened."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)
