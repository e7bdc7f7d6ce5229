"""
Tests for dialect profiles and selection.

Run with:
    pytest tests/test_dialects.py -v
"""

import dataclasses

import pytest

from sas_export.export import (
    MYSQL,
    POSTGRESQL,
    ConfigurationError,
    MissingDialectError,
    UnsupportedDialectError,
    get_dialect,
)


def test_builtin_dialects_by_exact_name():
    assert get_dialect("MySQL") is MYSQL
    assert get_dialect("PostgreSQL") is POSTGRESQL


@pytest.mark.parametrize("name", ["mysql", "POSTGRESQL", "Oracle", "SQLite"])
def test_unknown_names_are_unsupported(name):
    with pytest.raises(UnsupportedDialectError) as excinfo:
        get_dialect(name)
    assert excinfo.value.name == name
    assert isinstance(excinfo.value, ConfigurationError)


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_names_are_missing(name):
    with pytest.raises(MissingDialectError):
        get_dialect(name)


def test_profiles_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MYSQL.int_type = "bigint"


def test_identifier_quoting():
    assert MYSQL.quote_identifier("t") == "`t`"
    assert POSTGRESQL.quote_identifier("t") == '"t"'


def test_both_dialects_use_backslash_n_for_null():
    assert MYSQL.null_token == "\\N"
    assert POSTGRESQL.null_token == "\\N"
