"""
Table Catalog
=============

Discovers source tables in a folder.

The binary file parser is not part of this package: callers inject a
loader that opens one file and returns its column catalog and row
stream. The catalog only lists files, derives table names and decides
which loading failures are skippable.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Sequence

from .column_types import ColumnDescriptor
from .errors import CatalogIOError


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_PATTERN = "*.sas7bdat"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class TableSource:
    """A source table: its name, column catalog and a pull-based row stream."""
    name: str
    columns: list[ColumnDescriptor]
    rows: Iterable[Sequence[Any] | None] = field(default_factory=tuple)


SourceLoader = Callable[[Path], TableSource]


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def table_name_for(path: Path) -> str:
    """Table name of a source file: the file name without its extension."""
    return Path(path).stem


def open_table(path: Path, loader: SourceLoader) -> TableSource:
    """
    Load a single source file.

    Raises:
        CatalogIOError: If the file cannot be opened or parsed.
    """
    path = Path(path)
    try:
        source = loader(path)
    except CatalogIOError:
        raise
    except OSError as e:
        raise CatalogIOError(f"Failed to open {path}: {e}", source=str(path)) from e
    return replace(source, name=table_name_for(path))


def discover_tables(
    folder: str | Path,
    loader: SourceLoader,
    pattern: str = DEFAULT_PATTERN
) -> Iterator[TableSource]:
    """
    Yield one TableSource per matching file in a folder, in name order.

    Files that fail to load are logged and skipped so that one bad file
    does not stop the remaining tables.

    Args:
        folder: Directory holding the source files.
        loader: Opens one file and returns its TableSource.
        pattern: Glob pattern selecting the source files.

    Raises:
        CatalogIOError: If the folder itself cannot be listed.
    """
    directory = Path(folder)
    if not directory.is_dir():
        raise CatalogIOError(
            f"Error while listing source files in folder: {directory}",
            source=str(directory)
        )

    try:
        paths = sorted(p for p in directory.glob(pattern) if p.is_file())
    except OSError as e:
        raise CatalogIOError(
            f"Error while listing source files in folder: {directory}",
            source=str(directory)
        ) from e

    for path in paths:
        logger.info("Processing: %s", path.name)
        try:
            source = open_table(path, loader)
        except CatalogIOError as e:
            logger.warning("Skipping %s: %s", path.name, e)
            continue
        yield source
