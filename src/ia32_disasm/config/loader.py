import warnings
from dataclasses import fields
from typing import Dict, Any, Optional

import yaml

from .models import DisassemblerConfig, INPUT_FORMATS

# @intent:utility_function int / 10進文字列 / "0x" 文字列を整数に変換します。
def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer format: {value}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        except ValueError:
            pass
    raise ValueError(f"Invalid integer format: {value}")


class ConfigLoader:
    def load_from_file(self, path: str) -> DisassemblerConfig:
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return self.parse(data or {})

    # @intent:responsibility YAML から読み込んだ辞書を DisassemblerConfig に変換します。
    # @intent:rationale 未知のキーは警告のみで無視し、値の不正は ValueError とします。
    def parse(self, data: Dict[str, Any]) -> DisassemblerConfig:
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping.")

        known = {f.name for f in fields(DisassemblerConfig)}
        for key in data:
            if key not in known:
                warnings.warn(f"Unknown configuration key '{key}' ignored.", UserWarning)

        input_format = str(data.get("input_format", "raw")).lower()
        if input_format not in INPUT_FORMATS:
            raise ValueError(f"Unsupported input format: {input_format}")

        start = parse_int(data.get("start", 0))
        if start < 0:
            raise ValueError(f"Start offset must be non-negative: {start}")

        fill_byte = parse_int(data.get("fill_byte", 0))
        if not 0 <= fill_byte <= 0xFF:
            raise ValueError(f"Fill byte {fill_byte} is not an 8-bit value.")

        show_bytes = data.get("show_bytes", False)
        if not isinstance(show_bytes, bool):
            raise ValueError(f"show_bytes must be a boolean: {show_bytes}")

        return DisassemblerConfig(
            input_format=input_format,
            start=start,
            length=self._parse_optional_int(data.get("length")),
            origin=self._parse_optional_int(data.get("origin")),
            show_bytes=show_bytes,
            fill_byte=fill_byte,
        )

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        result = parse_int(value)
        if result < 0:
            raise ValueError(f"Value must be non-negative: {value}")
        return result
