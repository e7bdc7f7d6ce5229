"""
Tests for the export API routes.

Run with:
    pytest tests/test_api.py -v
"""

import json

import pytest
from fastapi.testclient import TestClient

from sas_export.app.main import app


PATIENT_COLUMNS = [
    {"name": "ID", "type": "Numeric", "length": 2},
    {"name": "NAME", "type": "Character", "length": 20, "label": "Patient name"},
    {"name": "VISIT", "type": "Numeric", "length": 8, "format": "YYMMDD"},
]


@pytest.fixture()
def client(output_dirs):
    return TestClient(app)


# =============================================================================
# SERVICE
# =============================================================================

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_version(client):
    body = client.get("/version").json()
    assert body["version"] == "1.0.0"
    assert body["name"] == "SAS Export"


# =============================================================================
# CSV
# =============================================================================

def test_export_csv_plain(client, output_dirs):
    output_dir, artifacts_dir = output_dirs
    response = client.post("/export/csv", json={
        "table": "PATIENTS",
        "columns": PATIENT_COLUMNS,
        "rows": [[1, "Ann, Jr.", "2020-01-05"], [2, None, None]],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["rows"] == 2

    content = (output_dir / "PATIENTS.csv").read_text(encoding="utf-8")
    assert content == 'ID,NAME,VISIT\n1,"Ann, Jr.",2020-01-05\n2,,\n'

    manifest = json.loads((artifacts_dir / body["run_id"] / "export_manifest.json").read_text())
    assert manifest["kind"] == "csv"
    assert manifest["rows"] == 2


def test_export_csv_with_dialect(client, output_dirs):
    output_dir, _ = output_dirs
    response = client.post("/export/csv", json={
        "table": "PATIENTS",
        "columns": PATIENT_COLUMNS,
        "rows": [[1, None, "2020-01-05"]],
        "dialect": "PostgreSQL",
        "include_header": False,
    })

    assert response.status_code == 200
    content = (output_dir / "PATIENTS.csv").read_text(encoding="utf-8")
    assert content == '"1",\\N,"2020-01-05"\n'


def test_export_csv_infinity(client, output_dirs):
    output_dir, _ = output_dirs
    columns = [{"name": "X", "type": "Numeric", "length": 8}, {"name": "Y", "type": "Numeric", "length": 8}]
    response = client.post("/export/csv", json={
        "table": "T",
        "columns": columns,
        "rows": [["Infinity", 2.5]],
        "dialect": "MySQL",
    })

    assert response.status_code == 200
    assert (output_dir / "T.csv").read_text(encoding="utf-8") == '"X","Y"\n,"2.5"\n'


def test_export_csv_unsupported_dialect(client):
    response = client.post("/export/csv", json={
        "table": "PATIENTS",
        "columns": PATIENT_COLUMNS,
        "rows": [],
        "dialect": "Oracle",
    })

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "The database dialect is not supported."


def test_export_csv_rejects_path_in_table_name(client):
    response = client.post("/export/csv", json={
        "table": "../escape",
        "columns": PATIENT_COLUMNS,
        "rows": [],
    })
    assert response.status_code == 422


def test_export_csv_rejects_short_rows(client):
    response = client.post("/export/csv", json={
        "table": "PATIENTS",
        "columns": PATIENT_COLUMNS,
        "rows": [[1]],
    })
    assert response.status_code == 422


# =============================================================================
# SCHEMA
# =============================================================================

def test_export_schema_mysql(client, output_dirs):
    output_dir, _ = output_dirs
    response = client.post("/export/schema", json={
        "dialect": "MySQL",
        "schema_name": "clinic",
        "tables": [{"name": "PATIENTS", "columns": PATIENT_COLUMNS}],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["tables"] == 1
    assert "CREATE TABLE IF NOT EXISTS `PATIENTS` (" in body["script"]
    assert " `ID` int NULL DEFAULT NULL,\n" in body["script"]
    assert " `NAME` varchar(20) NULL DEFAULT NULL COMMENT 'Patient name',\n" in body["script"]
    assert " `VISIT` date NULL DEFAULT NULL) ENGINE='InnoDB'" in body["script"]
    assert (output_dir / "clinic.sql").read_text(encoding="utf-8") == body["script"]


def test_export_schema_blank_name(client):
    response = client.post("/export/schema", json={
        "dialect": "PostgreSQL",
        "schema_name": "  ",
        "tables": [],
    })
    assert response.status_code == 400


def test_export_schema_missing_dialect(client):
    response = client.post("/export/schema", json={
        "dialect": "",
        "schema_name": "clinic",
    })
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "No database dialect was given."


# =============================================================================
# METADATA
# =============================================================================

def test_export_metadata(client):
    response = client.post("/export/metadata", json={"columns": PATIENT_COLUMNS})

    assert response.status_code == 200
    lines = response.json()["csv"].splitlines()
    assert lines[0] == "Number,Name,Type,Data Length,Format,Label"
    assert lines[3] == "3,VISIT,Numeric,8,YYMMDD,"


# =============================================================================
# EMPTY CELLS AND FREE-TEXT LABELS
# =============================================================================

def test_export_single_column_with_empty_cells(client, output_dirs):
    output_dir, _ = output_dirs
    columns = [{"name": "A", "type": "Numeric", "length": 8}]

    response = client.post("/export/csv", json={"table": "ONE", "columns": columns, "rows": [[None], [1]]})
    assert response.status_code == 200
    assert (output_dir / "ONE.csv").read_text(encoding="utf-8") == "A\n\n1\n"

    response = client.post("/export/csv", json={
        "table": "ONE", "columns": columns, "rows": [["Infinity"]], "dialect": "MySQL",
    })
    assert response.status_code == 200
    assert response.json()["rows"] == 1


def test_export_schema_with_punctuated_labels(client):
    columns = [
        {"name": "W", "type": "Numeric", "length": 8, "label": "Weight; kg"},
        {"name": "H", "type": "Numeric", "length": 8, "label": "Height (cm"},
    ]
    response = client.post("/export/schema", json={
        "dialect": "MySQL",
        "schema_name": "clinic",
        "tables": [{"name": "M", "columns": columns}],
    })

    assert response.status_code == 200
    assert "COMMENT 'Weight; kg'" in response.json()["script"]
