"""
x86 (32ビット) 命令セットのデコードパッケージ。
"""
from typing import Dict

from ia32_disasm.transport.stream import InstructionStream, TruncatedError
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind
from .maps import DECODE_MAP, REP_DECODE_MAP, PREFIX_MAPS, UNKNOWN_FORMAT, OpcodeEntry
from .base import build_instruction

# @intent:responsibility 現在のカーソル位置から1命令をデコードします。
# @intent:pre-condition ストリームには少なくとも1バイトが残っている必要があります。
# @intent:post-condition 例外は送出しません。バイト不足は TRUNCATED 種別のマーカーとして返します。
def decode_instruction(stream: InstructionStream,
                       decode_map: Dict[int, OpcodeEntry] = DECODE_MAP,
                       unknown_format: str = UNKNOWN_FORMAT) -> DecodedInstruction:
    """
    オペコードをディスパッチテーブルで引き、対応するデコード関数を呼び出します。
    未知のオペコードの場合は1バイトだけ進めて UNKNOWN マーカーを返します。
    """
    start = stream.position
    opcode = stream.read_u8("opcode")
    entry = decode_map.get(opcode)
    if entry is None:
        return build_instruction(stream, start, unknown_format.format(opcode=opcode),
                                 kind=InstructionKind.UNKNOWN)
    try:
        return entry.decode(opcode, stream, start)
    except TruncatedError as e:
        # 不足したフィールドまでに消費したバイトを含めてマーカーとする
        return build_instruction(stream, start, f"Incomplete {entry.category} ({e.field} truncated)",
                                 kind=InstructionKind.TRUNCATED)
