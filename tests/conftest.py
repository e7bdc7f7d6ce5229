import pytest

from sas_export.export import ColumnDescriptor, SemanticType, TableSource


@pytest.fixture
def patients_columns():
    return [
        ColumnDescriptor("ID", SemanticType.NUMERIC, 2),
        ColumnDescriptor("NAME", SemanticType.CHARACTER, 20, label="Patient name"),
        ColumnDescriptor("VISIT", SemanticType.NUMERIC, 8, display_format="YYMMDD"),
    ]


@pytest.fixture
def patients_table(patients_columns):
    return TableSource(name="PATIENTS", columns=patients_columns)


@pytest.fixture
def output_dirs(tmp_path, monkeypatch):
    """Point the API's output and artifact directories at tmp_path."""
    from sas_export.app import artifact_writer, config

    output_dir = tmp_path / "output"
    artifacts_dir = tmp_path / "artifacts"
    monkeypatch.setattr(config, "OUTPUT_DIR", str(output_dir))
    monkeypatch.setattr(artifact_writer, "ARTIFACTS_DIR", str(artifacts_dir))
    return output_dir, artifacts_dir
