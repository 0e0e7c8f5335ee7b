import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

# Ensure src/ is on sys.path for local test runs without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from spaten.cli.main import cli  # noqa: E402

from spaten_builders import (  # noqa: E402
    HEADER,
    block,
    encode_body,
    encode_feature,
    int_tag,
    point_wkb,
    spaten_stream,
)

pytestmark = [pytest.mark.integration, pytest.mark.usefixtures("restore_logging")]


def _invoke(*args: str):
    return CliRunner().invoke(cli, ["--log-level", "WARNING", *args])


def test_dump(spaten_file: Path) -> None:
    result = _invoke("dump", str(spaten_file))

    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if "POINT" in line]
    assert len(lines) == 2
    assert 'name="A street"' in lines[0]
    assert "id=42" in lines[1]


def test_dump_without_wkt(spaten_file: Path) -> None:
    result = _invoke("dump", "--no-wkt", str(spaten_file))

    assert result.exit_code == 0, result.output
    assert "POINT" not in result.output
    assert '{name="A street"}' in result.output
    assert "{id=42}" in result.output


def test_dump_limit(tmp_path: Path) -> None:
    body = encode_body(
        [encode_feature(point_wkb(i, i), [int_tag("seq", i)]) for i in range(5)]
    )
    path = tmp_path / "five.spaten"
    path.write_bytes(spaten_stream(body))

    result = _invoke("dump", "--limit", "2", str(path))

    assert result.exit_code == 0, result.output
    assert "seq=0" in result.output
    assert "seq=1" in result.output
    assert "seq=2" not in result.output


def test_dump_limit_zero_prints_nothing(tmp_path: Path) -> None:
    body = encode_body(
        [encode_feature(point_wkb(i, i), [int_tag("seq", i)]) for i in range(3)]
    )
    path = tmp_path / "three.spaten"
    path.write_bytes(spaten_stream(body))

    result = _invoke("dump", "--limit", "0", str(path))

    assert result.exit_code == 0, result.output
    assert "seq=" not in result.output


def test_dump_negative_limit_rejected(spaten_file: Path) -> None:
    result = _invoke("dump", "--limit", "-1", str(spaten_file))

    assert result.exit_code == 2
    assert "seq=" not in result.output
    assert "POINT" not in result.output


def test_stats(spaten_file: Path) -> None:
    result = _invoke("stats", str(spaten_file))

    assert result.exit_code == 0, result.output
    assert "blocks: 1" in result.output
    assert "features: 2" in result.output


def test_invalid_file_exits_with_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.spaten"
    path.write_bytes(b"NOTSPATEN")

    result = _invoke("dump", str(path))

    assert result.exit_code == 1
    assert "Invalid SPATEN magic" in result.output


def test_format_error_mid_stream(tmp_path: Path) -> None:
    path = tmp_path / "compressed.spaten"
    path.write_bytes(HEADER + block(b"zz", compression=2))

    result = _invoke("stats", str(path))

    assert result.exit_code == 1
    assert "Unsupported compression method: 2" in result.output


def test_max_block_size_option(spaten_file: Path) -> None:
    result = _invoke("stats", "--max-block-size", "8", str(spaten_file))

    assert result.exit_code == 1
    assert "exceeds limit" in result.output


def test_missing_file() -> None:
    result = _invoke("dump", "does-not-exist.spaten")
    assert result.exit_code == 2


def test_invalid_log_level(spaten_file: Path) -> None:
    result = CliRunner().invoke(cli, ["--log-level", "chatty", "stats", str(spaten_file)])
    assert result.exit_code == 2
    assert "Invalid log level" in result.output
