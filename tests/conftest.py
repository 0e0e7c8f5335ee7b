import logging
import sys
from pathlib import Path

import pytest
import structlog

# Ensure src/ is on sys.path for local test runs without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from spaten_builders import spaten_stream, two_feature_body  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line(
        "markers",
        "integration: tests that touch the filesystem or run the CLI end to end",
    )


@pytest.fixture
def two_feature_stream() -> bytes:
    """Header + one block with two point features + terminator."""
    return spaten_stream(two_feature_body())


@pytest.fixture
def spaten_file(tmp_path: Path, two_feature_stream: bytes) -> Path:
    """The two-feature stream written to disk."""
    path = tmp_path / "sample.spaten"
    path.write_bytes(two_feature_stream)
    return path


@pytest.fixture
def restore_logging():
    """Undo configure_logging() so later tests see structlog defaults."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
