import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from spaten.config.config import ReaderConfig  # noqa: E402


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("SPATEN_MAX_BLOCK_SIZE", "SPATEN_LOG_LEVEL", "SPATEN_JSON_LOGS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_defaults(clean_env):
    config = ReaderConfig.from_env()
    assert config.max_block_size is None
    assert config.log_level == "INFO"
    assert config.json_logs is False


@pytest.mark.unit
def test_from_env(clean_env):
    clean_env.setenv("SPATEN_MAX_BLOCK_SIZE", "1048576")
    clean_env.setenv("SPATEN_LOG_LEVEL", "DEBUG")
    clean_env.setenv("SPATEN_JSON_LOGS", "TRUE")

    config = ReaderConfig.from_env()
    assert config.max_block_size == 1048576
    assert config.log_level == "DEBUG"
    assert config.json_logs is True


@pytest.mark.unit
def test_empty_max_block_size_means_unbounded(clean_env):
    clean_env.setenv("SPATEN_MAX_BLOCK_SIZE", "")
    assert ReaderConfig.from_env().max_block_size is None


@pytest.mark.unit
def test_max_block_size_must_be_positive():
    with pytest.raises(ValidationError):
        ReaderConfig(max_block_size=0)
    with pytest.raises(ValidationError):
        ReaderConfig(max_block_size=2**32)


@pytest.mark.unit
def test_from_yaml(tmp_path: Path):
    path = tmp_path / "spaten.yaml"
    path.write_text("max_block_size: 4096\nlog_level: WARNING\n", encoding="utf-8")

    config = ReaderConfig.from_yaml(str(path))
    assert config.max_block_size == 4096
    assert config.log_level == "WARNING"
    assert config.json_logs is False


@pytest.mark.unit
def test_from_yaml_empty_file(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert ReaderConfig.from_yaml(str(path)) == ReaderConfig()


@pytest.mark.unit
def test_from_yaml_requires_mapping(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        ReaderConfig.from_yaml(str(path))
