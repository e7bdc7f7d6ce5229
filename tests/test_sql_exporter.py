"""
Tests for the SQL schema generator.

Run with:
    pytest tests/test_sql_exporter.py -v
"""

import io
import logging

import pytest

from sas_export.export import (
    MYSQL,
    POSTGRESQL,
    CatalogIOError,
    ColumnDescriptor,
    ConfigurationError,
    ExportIOError,
    SchemaGenerator,
    SchemaOptions,
    SchemaStateError,
    SemanticType,
    TableSource,
    discover_tables,
    export_schema_to_sql,
    generate_schema_script,
    validate_sql_export,
)
from sas_export.export.sql_exporter import GeneratorState


OPTIONS = SchemaOptions(schema="clinic")


# =============================================================================
# OPTIONS
# =============================================================================

def test_options_defaults():
    assert OPTIONS.engine == "InnoDB"
    assert OPTIONS.charset == "latin1"
    assert OPTIONS.collation == "latin1_bin"


@pytest.mark.parametrize("schema", ["", "   ", None])
def test_blank_schema_name_is_a_configuration_error(schema):
    with pytest.raises(ConfigurationError):
        SchemaOptions(schema=schema)


# =============================================================================
# MYSQL
# =============================================================================

def test_mysql_patients_script(patients_table):
    script = generate_schema_script([patients_table], MYSQL, OPTIONS)

    assert script == (
        "CREATE DATABASE `clinic`;\n\n"
        "USE `clinic`;\n\n"
        "CREATE TABLE IF NOT EXISTS `PATIENTS` (\n"
        " `ID` int NULL DEFAULT NULL,\n"
        " `NAME` varchar(20) NULL DEFAULT NULL COMMENT 'Patient name',\n"
        " `VISIT` date NULL DEFAULT NULL"
        ") ENGINE='InnoDB' CHARACTER SET latin1 COLLATE latin1_bin;\n\n"
    )


def test_mysql_uses_configured_engine_and_charset(patients_table):
    options = SchemaOptions(schema="s", engine="MyISAM", charset="utf8mb4", collation="utf8mb4_bin")
    script = generate_schema_script([patients_table], MYSQL, options)
    assert ") ENGINE='MyISAM' CHARACTER SET utf8mb4 COLLATE utf8mb4_bin;" in script


def test_mysql_temporal_columns():
    table = TableSource(name="EVENTS", columns=[
        ColumnDescriptor("AT", SemanticType.NUMERIC, 8, display_format="DATETIME"),
        ColumnDescriptor("CLOCK", SemanticType.NUMERIC, 8, display_format="TIME"),
        ColumnDescriptor("AMOUNT", SemanticType.NUMERIC, 8),
    ])
    script = generate_schema_script([table], MYSQL, OPTIONS)

    assert " `AT` datetime(3) NULL DEFAULT NULL,\n" in script
    assert " `CLOCK` time(3) NULL DEFAULT NULL,\n" in script
    assert " `AMOUNT` decimal(65,30) NULL DEFAULT NULL)" in script


def test_blank_labels_get_no_comment():
    table = TableSource(name="T", columns=[
        ColumnDescriptor("A", SemanticType.CHARACTER, 5, label="   "),
    ])
    assert "COMMENT" not in generate_schema_script([table], MYSQL, OPTIONS)
    assert "COMMENT" not in generate_schema_script([table], POSTGRESQL, OPTIONS)


# =============================================================================
# POSTGRESQL
# =============================================================================

def test_postgresql_patients_script(patients_table):
    script = generate_schema_script([patients_table], POSTGRESQL, OPTIONS)

    assert script == (
        'CREATE DATABASE "clinic" WITH LC_COLLATE latin1_bin LC_CHARSET latin1;\n\n'
        'CREATE TABLE "PATIENTS" (\n'
        ' "ID" integer NULL DEFAULT NULL,\n'
        ' "NAME" varchar(20) NULL DEFAULT NULL,\n'
        ' "VISIT" date NULL DEFAULT NULL'
        ');\n\n'
        'COMMENT ON COLUMN "clinic"."PATIENTS"."NAME" IS \'Patient name\';\n\n'
    )


def test_postgresql_has_no_engine_clause(patients_table):
    script = generate_schema_script([patients_table], POSTGRESQL, OPTIONS)
    assert "ENGINE" not in script
    assert "IF NOT EXISTS" not in script


def test_identifiers_are_quoted_without_escaping():
    table = TableSource(name='we"ird', columns=[
        ColumnDescriptor("A", SemanticType.CHARACTER, 1),
    ])
    script = generate_schema_script([table], POSTGRESQL, OPTIONS)
    assert 'CREATE TABLE "we"ird" (' in script


# =============================================================================
# STATE MACHINE
# =============================================================================

def test_table_before_schema_is_rejected(patients_columns):
    generator = SchemaGenerator(MYSQL, OPTIONS, io.StringIO())
    with pytest.raises(SchemaStateError):
        generator.emit_table("PATIENTS", patients_columns)


def test_schema_is_emitted_once():
    generator = SchemaGenerator(MYSQL, OPTIONS, io.StringIO())
    generator.emit_schema()
    with pytest.raises(SchemaStateError):
        generator.emit_schema()


def test_nothing_after_finish(patients_columns):
    generator = SchemaGenerator(MYSQL, OPTIONS, io.StringIO())
    generator.emit_schema()
    generator.emit_table("PATIENTS", patients_columns)
    generator.finish()

    assert generator.state == GeneratorState.DONE
    with pytest.raises(SchemaStateError):
        generator.emit_table("OTHER", patients_columns)


def test_schema_only_script():
    script = generate_schema_script([], MYSQL, OPTIONS)
    assert script == "CREATE DATABASE `clinic`;\n\nUSE `clinic`;\n\n"


# =============================================================================
# CATALOG INTEGRATION
# =============================================================================

def test_bad_source_file_is_skipped(tmp_path, patients_columns, caplog):
    for name in ("A.sas7bdat", "B.sas7bdat", "C.sas7bdat"):
        (tmp_path / name).write_bytes(b"")

    def loader(path):
        if path.name == "B.sas7bdat":
            raise CatalogIOError("corrupt header", source=str(path))
        return TableSource(name="ignored", columns=patients_columns)

    with caplog.at_level(logging.WARNING):
        script = generate_schema_script(discover_tables(tmp_path, loader), MYSQL, OPTIONS)

    assert "CREATE TABLE IF NOT EXISTS `A` (" in script
    assert "CREATE TABLE IF NOT EXISTS `C` (" in script
    assert "`B`" not in script
    assert "B.sas7bdat" in caplog.text


def test_unlistable_folder_surfaces_catalog_error(tmp_path):
    with pytest.raises(CatalogIOError):
        generate_schema_script(discover_tables(tmp_path / "missing", lambda p: None), MYSQL, OPTIONS)


# =============================================================================
# FILE EXPORT
# =============================================================================

def test_export_schema_to_sql_writes_valid_script(tmp_path, patients_table):
    path = tmp_path / "clinic.sql"

    count = export_schema_to_sql([patients_table], path, POSTGRESQL, OPTIONS)

    assert count == 1
    assert validate_sql_export(str(path))
    assert path.read_text(encoding="utf-8").startswith('CREATE DATABASE "clinic"')


def test_failing_table_stream_is_an_export_io_error(tmp_path, patients_table):
    def tables():
        yield patients_table
        raise OSError("source read failed")

    path = tmp_path / "clinic.sql"
    with pytest.raises(ExportIOError):
        export_schema_to_sql(tables(), path, MYSQL, OPTIONS)

    assert "CREATE TABLE IF NOT EXISTS `PATIENTS` (" in path.read_text(encoding="utf-8")


def test_labels_with_semicolons_and_parentheses_validate(tmp_path):
    table = TableSource(name="M", columns=[
        ColumnDescriptor("W", SemanticType.NUMERIC, 8, label="Weight; kg"),
        ColumnDescriptor("H", SemanticType.NUMERIC, 8, label="Height (cm"),
    ])
    for dialect in (MYSQL, POSTGRESQL):
        path = tmp_path / f"{dialect.name}.sql"
        export_schema_to_sql([table], path, dialect, OPTIONS)
        assert validate_sql_export(str(path))
