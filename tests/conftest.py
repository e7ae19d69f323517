"""Shared test fixtures for depscope tests."""

import pytest

from depscope.config import AnalysisConfig
from depscope.scanning.models import FileRecord


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def rec(name: str, *headers: str) -> FileRecord:
    """Shortcut to build a FileRecord."""
    return FileRecord(name=name, included_headers=list(headers))


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch):
    """No global/project config files and no DEPSCOPE_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for field_name in AnalysisConfig.__dataclass_fields__:
        monkeypatch.delenv(f"DEPSCOPE_{field_name.upper()}", raising=False)
    return tmp_path


@pytest.fixture
def chain_records():
    """a includes b.h and c.h, b includes c.h, no cycle."""
    return [
        rec("a.cpp", "b.h", "c.h"),
        rec("a.h"),
        rec("b.cpp", "c.h"),
        rec("b.h"),
        rec("c.cpp"),
        rec("c.h"),
    ]


@pytest.fixture
def cycle_records():
    """a -> b -> c -> a cycle, plus d which only includes its own header."""
    return [
        rec("a.cpp", "b.h"),
        rec("b.cpp", "c.h"),
        rec("c.cpp", "a.h"),
        rec("d.cpp", "d.h"),
        rec("a.h"),
        rec("b.h"),
        rec("c.h"),
        rec("d.h"),
    ]


@pytest.fixture
def linked_cycles_records():
    """Cycle {a, b} depends on cycle {c, d}."""
    return [
        rec("a.cpp", "b.h", "c.h"),
        rec("b.cpp", "a.h"),
        rec("c.cpp", "d.h"),
        rec("d.cpp", "c.h"),
        rec("a.h"),
        rec("b.h"),
        rec("c.h"),
        rec("d.h"),
    ]


@pytest.fixture
def chain_graph():
    """Chain graph: a -> b -> c -> d."""
    return {
        "a": {"b"},
        "b": {"c"},
        "c": {"d"},
        "d": set(),
    }


@pytest.fixture
def empty_graph():
    """Empty graph with no nodes."""
    return {}
