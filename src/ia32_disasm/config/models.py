from dataclasses import dataclass
from typing import Optional

INPUT_FORMATS = ("raw", "ihex")

@dataclass
class DisassemblerConfig:
    input_format: str = "raw"  # "raw", "ihex"
    start: int = 0x0000  # イメージ内の開始オフセット
    length: Optional[int] = None  # None: 末尾まで
    origin: Optional[int] = None  # 表示アドレスの起点。None: イメージのベースアドレス
    show_bytes: bool = False
    fill_byte: int = 0x00  # Intel HEX の隙間を埋める値
