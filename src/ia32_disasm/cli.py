# src/ia32_disasm/cli.py
"""
コマンドラインのエントリポイント。
機械語ファイルを読み込み、逆アセンブルリスティングを標準出力に書き出します。
"""
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from ia32_disasm.config.loader import ConfigLoader, parse_int
from ia32_disasm.config.models import DisassemblerConfig, INPUT_FORMATS
from ia32_disasm.config.builder import ListingBuilder


app = typer.Typer(add_completion=False)


# @intent:responsibility コマンドライン引数で設定ファイルの値を上書きした Config を生成します。
def _apply_overrides(config: DisassemblerConfig, input_format: Optional[str], start: Optional[str],
                     length: Optional[str], origin: Optional[str], show_bytes: Optional[bool]) -> DisassemblerConfig:
    if input_format is not None:
        input_format = input_format.lower()
        if input_format not in INPUT_FORMATS:
            raise ValueError(f"Unsupported input format: {input_format}")
        config = replace(config, input_format=input_format)
    if start is not None:
        config = replace(config, start=parse_int(start))
    if length is not None:
        config = replace(config, length=parse_int(length))
    if origin is not None:
        config = replace(config, origin=parse_int(origin))
    if show_bytes is not None:
        config = replace(config, show_bytes=show_bytes)
    return config


@app.command()
def main(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Machine code file."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="YAML configuration file."),
    input_format: Optional[str] = typer.Option(None, "--format", "-f", help="Input format: raw or ihex."),
    start: Optional[str] = typer.Option(None, "--start", help="Start offset within the image (e.g. 0x10)."),
    length: Optional[str] = typer.Option(None, "--length", help="Number of bytes to decode."),
    origin: Optional[str] = typer.Option(None, "--origin", help="Address printed for the first decoded byte."),
    show_bytes: Optional[bool] = typer.Option(None, "--bytes/--no-bytes", help="Show a hex dump column."),
):
    """
    32ビット x86 機械語を逆アセンブルします。
    """
    try:
        settings = ConfigLoader().load_from_file(str(config)) if config else DisassemblerConfig()
        settings = _apply_overrides(settings, input_format, start, length, origin, show_bytes)
        lines = ListingBuilder().build_listing(settings, str(path))
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for line in lines:
        typer.echo(line)


if __name__ == '__main__':
    app()
