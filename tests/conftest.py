import pytest

from helpers import FIXTURES


@pytest.fixture
def sample_path():
    return FIXTURES / "sample_graph.json"
