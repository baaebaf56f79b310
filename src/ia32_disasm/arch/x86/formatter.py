"""
x86 逆アセンブル結果の整形。
"""
from ia32_disasm.common.types import ListingEntry
from ia32_disasm.core.operation import DecodedInstruction

# 16進ダンプ列の最小幅 (最長11バイト命令 = 32文字を収める)
HEX_COLUMN_WIDTH = 32

# @intent:responsibility 命令を "%04x: TEXT" 形式の1行に整形します。
def format_instruction(instruction: DecodedInstruction) -> str:
    return format_entry(to_listing_entry(instruction))

def format_hex_bytes(raw: bytes) -> str:
    return " ".join(f"{b:02X}" for b in raw)

def to_listing_entry(instruction: DecodedInstruction) -> ListingEntry:
    return ListingEntry(instruction.offset, format_hex_bytes(instruction.raw), instruction.text)

# @intent:responsibility リスティング行を整形します。show_bytes=True の場合は16進ダンプ列を挿入します。
# @intent:note オフセットは小文字16進で最低4桁。4桁を超える場合も切り詰めません。
def format_entry(entry: ListingEntry, show_bytes: bool = False) -> str:
    text = entry.text
    if show_bytes:
        text = f"{entry.hex_bytes:<{HEX_COLUMN_WIDTH}} {text}"
    return f"{entry.offset:04x}: {text}"
