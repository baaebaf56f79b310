# src/ia32_disasm/arch/x86/disassembler.py
"""
x86 (32ビット) 逆アセンブラ

バイト列を先頭から1パスで走査し、命令ごとのデコード結果を生成します。
Instruction Layer のディスパッチ (decode_instruction) を繰り返し呼び出し、
プレフィックスに応じて次のバイトのディスパッチテーブルを切り替えます。
"""
from typing import Iterator, List, Optional

from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind
from ia32_disasm.common.types import ListingEntry
from ia32_disasm.arch.x86.instructions import decode_instruction, DECODE_MAP, PREFIX_MAPS
from ia32_disasm.arch.x86.instructions.maps import UNKNOWN_FORMAT
from ia32_disasm.arch.x86.formatter import to_listing_entry, format_entry


# @intent:responsibility 入力バッファから逆アセンブル対象の範囲を切り出し、ストリームを生成します。
# @intent:pre-condition start と length はバッファの範囲内である必要があります。
def _open_stream(data: bytes, start: int, length: Optional[int], origin: int) -> InstructionStream:
    if not 0 <= start <= len(data):
        raise ValueError(f"Start offset {start:#x} is outside the buffer of {len(data)} bytes.")
    if length is None:
        end = len(data)
    else:
        if length < 0 or start + length > len(data):
            raise ValueError(f"Length {length:#x} from offset {start:#x} exceeds the buffer of {len(data)} bytes.")
        end = start + length
    return InstructionStream(data[start:end], origin=origin + start)


# @intent:responsibility バイト列を1パスでデコードし、DecodedInstruction を順に返します。
# @intent:invariant 各命令は1バイト以上を消費する。TRUNCATED マーカーを返した時点でパスを終了します。
def decode_instructions(data: bytes, start: int = 0, length: Optional[int] = None,
                        origin: int = 0) -> Iterator[DecodedInstruction]:
    """
    `start` から `length` バイトの範囲をデコードします。
    表示アドレスは origin + start を起点とします。
    """
    stream = _open_stream(data, start, length, origin)
    decode_map, unknown_format = DECODE_MAP, UNKNOWN_FORMAT

    while not stream.at_end():
        instruction = decode_instruction(stream, decode_map, unknown_format)
        yield instruction

        if instruction.kind is InstructionKind.TRUNCATED:
            # バイト不足はパス全体の終了とする (再同期は行わない)
            return

        # REP の直後のみ制限付きマップでディスパッチする
        if instruction.kind is InstructionKind.PREFIX:
            decode_map, unknown_format = PREFIX_MAPS.get(instruction.raw[0], (DECODE_MAP, UNKNOWN_FORMAT))
        else:
            decode_map, unknown_format = DECODE_MAP, UNKNOWN_FORMAT


# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、(offset, hex_bytes, text) のリストを返します。
def disassemble(data: bytes, start: int = 0, length: Optional[int] = None,
                origin: int = 0) -> List[ListingEntry]:
    return [to_listing_entry(instr) for instr in decode_instructions(data, start, length, origin)]


def format_listing(data: bytes, start: int = 0, length: Optional[int] = None,
                   origin: int = 0, show_bytes: bool = False) -> List[str]:
    """逆アセンブル結果を "%04x: TEXT" 形式の行リストとして返します。"""
    return [format_entry(entry, show_bytes) for entry in disassemble(data, start, length, origin)]
