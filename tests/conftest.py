"""Shared test fixtures for errorflow tests."""

from pathlib import Path

import pytest

from errorflow.analysis import ErrorAnalysisEngine
from errorflow.config import AnalysisConfig
from errorflow.scanning import SourceIndex


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


@pytest.fixture
def write_sources(tmp_path):
    """Write {relative path: content} under tmp_path and return tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def index():
    """Fresh source index with default configuration."""
    return SourceIndex(AnalysisConfig())


@pytest.fixture
def engine():
    """Fresh engine with default configuration."""
    return ErrorAnalysisEngine(AnalysisConfig())


@pytest.fixture
def login_error_source():
    """Declaration used by the end-to-end scenarios."""
    return "export class LoginError extends Error {}\n"


@pytest.fixture
def login_raise_source():
    """A function raising LoginError."""
    return (
        "import { LoginError } from './a';\n"
        "\n"
        "export function login(user: string) {\n"
        "  if (!user) {\n"
        "    throw new LoginError('missing user');\n"
        "  }\n"
        "}\n"
    )


@pytest.fixture
def login_intercept_source():
    """A catch clause testing for LoginError."""
    return (
        "import { login } from './b';\n"
        "import { LoginError } from './a';\n"
        "\n"
        "try {\n"
        "  login('');\n"
        "} catch (e) {\n"
        "  if (e instanceof LoginError) {\n"
        "    console.log('login failed');\n"
        "  }\n"
        "}\n"
    )
