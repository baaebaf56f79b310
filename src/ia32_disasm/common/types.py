"""
共通の型定義と固定テーブルを提供するモジュール。
逆アセンブラ全体で使用されるレジスタ名表・条件コード表・リスティング行の型を定義します。
"""
from typing import NamedTuple, Tuple

# @intent:data_structure 32ビット汎用レジスタ名。レジスタコードの下位3ビットで引きます。
REGISTER_NAMES: Tuple[str, ...] = ("EAX", "ECX", "EDX", "EBX", "ESP", "EBP", "ESI", "EDI")

# @intent:data_structure 条件分岐の条件名。Jcc オペコードの下位4ビットで引きます。
CONDITION_NAMES: Tuple[str, ...] = (
    "O", "NO", "B/NAE/C", "NB/AE/NC", "E/Z", "NE/NZ", "BE/NA", "NBE/A",
    "S", "NS", "P/PE", "NP/PO", "L/NGE", "NL/GE", "LE/NG", "NLE/G",
)

# @intent:data_structure 逆アセンブル結果1行分。Loader, CLI など複数のレイヤーで共通して使用されます。
class ListingEntry(NamedTuple):
    offset: int
    hex_bytes: str  # 例: "B8 78 56 34 12"
    text: str       # 例: "MOV EAX, 0x12345678"
