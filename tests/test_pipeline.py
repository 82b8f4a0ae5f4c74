"""Tests for the full analysis pipeline."""

import pytest

from di_lens.document import load_document
from di_lens.models import AnalysisConfig, SmellType
from di_lens.pipeline import run_analysis, run_compare
from helpers import make_document


def test_analyze_sample(sample_path):
    report = run_analysis(load_document(sample_path))

    metrics = report.graph.metrics
    # The document's advisory nodeCount of 999 is ignored
    assert metrics.node_count == 7
    assert metrics.edge_count == 6
    assert metrics.module_count == 4
    assert metrics.package_count == 3
    assert metrics.cycle_count == 0
    assert metrics.max_depth == 1


def test_sample_smells(sample_path):
    report = run_analysis(load_document(sample_path))
    assert [s.type for s in report.smells] == [SmellType.DUPLICATE_PROVIDERS]
    assert report.smells[0].node_ids == (
        "com.example.net.NetworkModule.apiClient",
        "com.example.app.TestModule.apiClient",
    )


def test_sample_labels(sample_path):
    report = run_analysis(load_document(sample_path))
    graph = report.graph
    assert graph.get_node("com.example.data.UserRepository.<init>").label == "UserRepository"
    assert graph.get_node("com.example.net.NetworkModule.apiClient").label == "NetworkModule.apiClient"


def test_sample_rankings(sample_path):
    report = run_analysis(load_document(sample_path))
    assert report.metrics.high_fan_in[0] == ("com.example.net.ApiClient", 3)
    assert report.summary["node_kinds"] == {"type": 3, "provider": 3, "consumer": 1}


def test_progress_callback(sample_path):
    calls = []
    run_analysis(load_document(sample_path), progress=lambda s, c, t: calls.append((s, c, t)))
    stages = [c[0] for c in calls]
    assert stages[0] == "Building"
    assert "Analyzing" in stages
    assert calls[-1] == ("Detecting smells", 1, 1)


def test_config_limits(sample_path):
    config = AnalysisConfig(top_n=2, max_paths=1)
    report = run_analysis(load_document(sample_path), config)
    assert len(report.metrics.high_fan_in) == 2
    assert len(report.metrics.longest_paths) == 1


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("DI_LENS_TOP_N", "3")
    monkeypatch.setenv("DI_LENS_LOG_LEVEL", "debug")
    monkeypatch.delenv("DI_LENS_MAX_PATHS", raising=False)
    config = AnalysisConfig()
    assert config.top_n == 3
    assert config.max_paths == 5
    assert config.log_level == "DEBUG"


def test_config_ignores_bad_env(monkeypatch):
    monkeypatch.setenv("DI_LENS_TOP_N", "lots")
    assert AnalysisConfig().top_n == 10


@pytest.mark.parametrize("raw", ["0", "-2"])
def test_config_ignores_non_positive_env(monkeypatch, raw):
    monkeypatch.setenv("DI_LENS_TOP_N", raw)
    monkeypatch.setenv("DI_LENS_MAX_PATHS", raw)
    config = AnalysisConfig()
    assert config.top_n == 10
    assert config.max_paths == 5


def test_negative_env_keeps_full_rankings(monkeypatch):
    monkeypatch.setenv("DI_LENS_TOP_N", "-2")
    monkeypatch.setenv("DI_LENS_MAX_PATHS", "-1")
    document = make_document(
        types=["A", "B", "C"],
        edges=[("A", "B", "requires"), ("B", "C", "requires")],
    )
    report = run_analysis(document)
    assert len(report.metrics.high_fan_in) == 3
    assert len(report.metrics.longest_paths) == 2


def test_report_to_dict(sample_path):
    data = run_analysis(load_document(sample_path)).to_dict()
    assert set(data) == {"summary", "metrics", "smells"}
    assert data["smells"][0]["type"] == "duplicate_providers"


def test_report_to_dict_with_graph(sample_path):
    report = run_analysis(load_document(sample_path))
    data = report.to_dict(include_graph=True)
    assert data["graph"] == report.graph.to_dict()
    assert data["graph"]["nodes"][0]["id"] == "com.example.data.UserRepository"
    assert data["summary"]["module_breakdown"][0]["module"] == ":data"


def test_compare():
    baseline = make_document(types=["A", "B"], edges=[("A", "B", "requires")])
    candidate = make_document(
        types=["A", "B", "C"],
        edges=[("A", "B", "requires"), ("B", "C", "requires")],
    )
    report = run_compare(baseline, candidate)
    assert [n.id for n in report.diff.added_nodes] == ["C"]
    assert report.diff.metrics_delta.max_depth == 1
    assert report.to_dict()["candidate"]["node_count"] == 3


def test_compare_same_document(sample_path):
    document = load_document(sample_path)
    report = run_compare(document, document)
    assert report.diff.is_empty
