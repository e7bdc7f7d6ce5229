"""
Application Configuration
=========================

Central configuration for the API.
Every setting can be overridden via an environment variable (a .env file
in the working directory is loaded first).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env before any setting is read
load_dotenv()


# =============================================================================
# VERSION
# =============================================================================

VERSION = "1.0.0"
APP_NAME = "SAS Export"


# =============================================================================
# OUTPUT DIRECTORY
# =============================================================================

# Default output directory (can be overridden via environment variable)
OUTPUT_DIR = os.environ.get(
    "SAS_EXPORT_OUTPUT_DIR",
    str(Path(__file__).parent.parent.parent.parent / "output")
)


def get_output_dir() -> str:
    """
    Get the output directory path, creating it if it doesn't exist.

    Returns:
        Absolute path to output directory.
    """
    output_path = Path(OUTPUT_DIR)
    output_path.mkdir(parents=True, exist_ok=True)
    return str(output_path.resolve())


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("SAS_EXPORT_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# =============================================================================
# EXPORT DEFAULTS
# =============================================================================

DEFAULT_DIALECT = os.environ.get("SAS_EXPORT_DIALECT", "MySQL")
DEFAULT_ENGINE = os.environ.get("SAS_EXPORT_ENGINE", "InnoDB")
DEFAULT_CHARSET = os.environ.get("SAS_EXPORT_CHARSET", "latin1")
DEFAULT_COLLATION = os.environ.get("SAS_EXPORT_COLLATION", "latin1_bin")
