"""Tests for extension-based storage dispatch.

Author: Michael Economou
Date: 2026-03-09
"""

import sqlite3

import pytest

from solutionlib.core.solution_storage import is_xml_path, load_model, save_model


@pytest.mark.unit
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a.solxml", True),
        ("A.SOLXML", True),
        ("dir/b.SolXml", True),
        ("a.solsqlt", False),
        ("a.xml", False),
        ("noext", False),
        ("a.solxml.bak", False),
    ],
)
def test_is_xml_path(path, expected):
    assert is_xml_path(path) is expected


@pytest.mark.integration
def test_xml_extension_writes_xml(tmp_path, sample_model):
    path = tmp_path / "demo.SOLXML"

    save_model(path, sample_model)

    assert path.read_bytes().startswith(b"<?xml")
    model, _counts = load_model(path)
    assert model.structure() == sample_model.structure()


@pytest.mark.integration
@pytest.mark.parametrize("name", ["demo.solsqlt", "demo.db", "demo"])
def test_other_extensions_write_sqlite(tmp_path, sample_model, name):
    path = tmp_path / name

    save_model(path, sample_model)

    conn = sqlite3.connect(path)
    try:
        assert conn.execute("SELECT COUNT(*) FROM solution_item").fetchone()[0] == 7
    finally:
        conn.close()
    model, _counts = load_model(path)
    assert model.structure() == sample_model.structure()


@pytest.mark.integration
def test_formats_are_interchangeable(tmp_path, sample_model):
    db_path = tmp_path / "demo.solsqlt"
    xml_path = tmp_path / "demo.solxml"

    save_model(db_path, sample_model)
    from_db, db_counts = load_model(db_path)
    save_model(xml_path, from_db)
    from_xml, xml_counts = load_model(xml_path)

    assert from_xml.structure() == sample_model.structure()
    assert xml_counts == db_counts
