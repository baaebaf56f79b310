# tests/test_cli.py
"""
コマンドラインエントリポイントのテスト。
"""
import pytest
from typer.testing import CliRunner

from ia32_disasm.cli import app

# @intent:test_suite CLI の出力と終了コードの検証。

runner = CliRunner()

CODE = bytes([0x90, 0xB8, 0x78, 0x56, 0x34, 0x12, 0xC3])


@pytest.fixture
def code_file(tmp_path):
    path = tmp_path / "code.bin"
    path.write_bytes(CODE)
    return path


def test_listing(code_file):
    result = runner.invoke(app, [str(code_file)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["0000: NOP", "0001: MOV EAX, 0x12345678", "0006: RET"]


def test_show_bytes(code_file):
    result = runner.invoke(app, [str(code_file), "--bytes"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == f"0000: {'90':<32} NOP"


def test_window_and_origin(code_file):
    result = runner.invoke(app, [str(code_file), "--start", "0x6", "--origin", "0x1000"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1006: RET"]


def test_intel_hex(tmp_path):
    path = tmp_path / "code.hex"
    path.write_text(":0210000090C39B\n:00000001FF\n")
    result = runner.invoke(app, [str(path), "--format", "ihex"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1000: NOP", "1001: RET"]


# @intent:test_case_truncated バイト不足で終わる入力も正常終了 (0) とします。
def test_truncated_input_exits_zero(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(bytes([0x90, 0xB8, 0x01]))
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["0000: NOP", "0001: Incomplete MOV imm32 (imm32 truncated)"]


def test_config_file(code_file, tmp_path):
    config = tmp_path / "disasm.yaml"
    config.write_text("start: 1\nlength: 5\n")
    result = runner.invoke(app, [str(code_file), "--config", str(config)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["0001: MOV EAX, 0x12345678"]


def test_options_override_config(code_file, tmp_path):
    config = tmp_path / "disasm.yaml"
    config.write_text("start: 1\nshow_bytes: true\n")
    result = runner.invoke(app, [str(code_file), "-c", str(config), "--start", "6", "--no-bytes"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["0006: RET"]


@pytest.mark.parametrize("args", [
    ["--start", "zz"],
    ["--start", "0x100"],
    ["--format", "elf"],
])
def test_invalid_values_exit_one(code_file, args):
    result = runner.invoke(app, [str(code_file)] + args)
    assert result.exit_code == 1
    assert "Error" in result.output


def test_invalid_config_exits_one(code_file, tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("input_format: elf\n")
    result = runner.invoke(app, [str(code_file), "-c", str(config)])
    assert result.exit_code == 1


def test_missing_file_is_usage_error(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.bin")])
    assert result.exit_code == 2


def test_oversized_intel_hex_exits_one(tmp_path):
    path = tmp_path / "sparse.hex"
    path.write_text(":01000000906F\n:020000041000EA\n:01000000C33C\n:00000001FF\n")
    result = runner.invoke(app, [str(path), "--format", "ihex"])
    assert result.exit_code == 1
    assert "exceeding the limit" in result.output
