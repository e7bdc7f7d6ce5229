"""
Artifact Writer
================

Manages writing per-run artifacts to the artifacts/ directory.
Artifacts record what each export run produced, for audit.
"""

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


# =============================================================================
# CONFIGURATION
# =============================================================================

# Default artifacts directory (can be overridden via environment variable)
ARTIFACTS_DIR = os.environ.get(
    "SAS_EXPORT_ARTIFACTS_DIR",
    str(Path(__file__).parent.parent.parent.parent / "artifacts")
)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def get_run_id() -> str:
    """Generate a unique run ID."""
    return str(uuid.uuid4())


def get_artifacts_dir(run_id: str) -> Path:
    """
    Get the artifacts directory for a specific run.
    Creates the directory if it doesn't exist.
    """
    run_dir = Path(ARTIFACTS_DIR) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def write_artifact(run_id: str, filename: str, content: Any) -> str:
    """
    Write an artifact file.

    Args:
        run_id: Unique run identifier.
        filename: Name of the artifact file.
        content: Content to write (str or dict for JSON).

    Returns:
        Path to the written file.
    """
    file_path = get_artifacts_dir(run_id) / filename

    with open(file_path, "w", encoding="utf-8") as f:
        if isinstance(content, dict):
            json.dump(content, f, indent=2, default=str)
        else:
            f.write(str(content))

    return str(file_path)


# =============================================================================
# EXPORT ARTIFACT WRITERS
# =============================================================================

def write_export_manifest(run_id: str, kind: str, manifest: dict) -> str:
    """Write export_manifest.json artifact."""
    return write_artifact(run_id, "export_manifest.json", {
        "run_id": run_id,
        "kind": kind,
        "created_at": datetime.now(timezone.utc).isoformat(),
        **manifest,
    })
