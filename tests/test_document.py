"""Tests for loading and validating scanner documents."""

import json

import pytest

from di_lens.document import DocumentError, load_document, parse_document
from di_lens.models import EdgeKind


def _minimal(**overrides):
    data = {"types": [], "providers": [], "consumers": [], "edges": []}
    data.update(overrides)
    return data


def test_load_sample(sample_path):
    document = load_document(sample_path)
    assert len(document.types) == 3
    assert len(document.providers) == 3
    assert len(document.consumers) == 1
    assert len(document.edges) == 6
    assert document.metrics.node_count == 999


def test_edge_aliases():
    document = parse_document(_minimal(edges=[{"from": "a", "to": "b", "kind": "needs"}]))
    edge = document.edges[0]
    assert edge.source == "a"
    assert edge.target == "b"
    assert edge.kind is EdgeKind.NEEDS


def test_optional_fields_default_to_none():
    document = parse_document(_minimal(types=[{"id": "T"}]))
    assert document.types[0].module is None
    assert document.types[0].package is None
    assert document.metrics is None


def test_missing_collection_rejected():
    with pytest.raises(DocumentError):
        parse_document({"types": [], "providers": [], "consumers": []})


def test_provider_requires_is_mandatory():
    with pytest.raises(DocumentError):
        parse_document(_minimal(providers=[{"id": "p", "type": "T", "owner": "o"}]))


def test_unknown_edge_kind_rejected():
    with pytest.raises(DocumentError) as exc:
        parse_document(_minimal(edges=[{"from": "a", "to": "b", "kind": "injects"}]))
    assert "Invalid graph document" in str(exc.value)


def test_invalid_json(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(DocumentError):
        load_document(bad)


def test_invalid_utf8(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_bytes(b'{"types": [{"id": "\xff\xfe"}]}')
    with pytest.raises(DocumentError) as exc:
        load_document(bad)
    assert "not UTF-8" in str(exc.value)


def test_missing_file(tmp_path):
    with pytest.raises(DocumentError):
        load_document(tmp_path / "missing.json")


def test_document_error_is_value_error(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps([1, 2, 3]))
    with pytest.raises(ValueError):
        load_document(path)
