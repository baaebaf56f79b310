# src/ia32_disasm/arch/x86/instructions/maps.py
"""
x86 (32ビット) オペコードマップ定義。
各命令モジュールからデコード関数をインポートし、オペコードとデコード規則の対応表を構築します。
"""
from functools import partial
from typing import Callable, Dict, NamedTuple, Tuple

from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction
from . import load, alu, control

# Decode Function Type: (opcode, stream, start) -> DecodedInstruction
DecodeFunc = Callable[[int, InstructionStream, int], DecodedInstruction]

# @intent:data_structure デコード規則。category はバイト不足マーカー ("Incomplete <category> ...") に使われます。
class OpcodeEntry(NamedTuple):
    category: str
    decode: DecodeFunc

STRING_OPS = {
    0xA4: "MOVSB", 0xA5: "MOVSD", 0xA6: "CMPSB", 0xA7: "CMPSD",
    0xAA: "STOSB", 0xAB: "STOSD", 0xAC: "LODSB", 0xAD: "LODSD",
    0xAE: "SCASB", 0xAF: "SCASD",
}

DECODE_MAP: Dict[int, OpcodeEntry] = {
    # --- Data transfer ---
    **{op: OpcodeEntry("MOV instruction", load.decode_mov_rm) for op in range(0x88, 0x8C)},
    **{op: OpcodeEntry("MOV imm8", partial(load.decode_mov_reg_imm, width=8)) for op in range(0xB0, 0xB8)},
    **{op: OpcodeEntry("MOV imm32", partial(load.decode_mov_reg_imm, width=32)) for op in range(0xB8, 0xC0)},
    0xC6: OpcodeEntry("MOV r/m8, imm8", partial(load.decode_mov_rm_imm, width=8)),
    0xC7: OpcodeEntry("MOV r/m32, imm32", partial(load.decode_mov_rm_imm, width=32)),
    0x8D: OpcodeEntry("LEA", load.decode_lea),
    **{op: OpcodeEntry("PUSH", load.decode_push_pop_reg) for op in range(0x50, 0x58)},
    **{op: OpcodeEntry("POP", load.decode_push_pop_reg) for op in range(0x58, 0x60)},
    0x68: OpcodeEntry("PUSH imm32", partial(load.decode_push_imm, width=32)),
    0x6A: OpcodeEntry("PUSH imm8", partial(load.decode_push_imm, width=8)),
    0x86: OpcodeEntry("XCHG", load.decode_xchg),
    0x87: OpcodeEntry("XCHG", load.decode_xchg),
    0x0F: OpcodeEntry("0F instruction", load.decode_two_byte),
    **{op: OpcodeEntry(name, partial(load.decode_string_op, mnemonic=name)) for op, name in STRING_OPS.items()},

    # --- ALU ---
    # 8-byte spans: xx0-xx5 of each group use ModR/M
    **{op: OpcodeEntry("arithmetic instruction", alu.decode_arith_rm) for op in range(0x00, 0x40) if op & 0x7 <= 5},
    0x80: OpcodeEntry("immediate arithmetic", alu.decode_arith_imm),
    0x81: OpcodeEntry("immediate arithmetic", alu.decode_arith_imm),
    0x83: OpcodeEntry("immediate arithmetic", alu.decode_arith_imm),
    **{op: OpcodeEntry("INC", alu.decode_inc_dec_reg) for op in range(0x40, 0x48)},
    **{op: OpcodeEntry("DEC", alu.decode_inc_dec_reg) for op in range(0x48, 0x50)},
    0x84: OpcodeEntry("TEST", alu.decode_test_rm),
    0x85: OpcodeEntry("TEST", alu.decode_test_rm),
    **{op: OpcodeEntry("shift/rotate", alu.decode_shift) for op in (0xC0, 0xC1, 0xD0, 0xD1, 0xD2, 0xD3)},
    0xF6: OpcodeEntry("MUL/IMUL/DIV/IDIV", alu.decode_group3),
    0xF7: OpcodeEntry("MUL/IMUL/DIV/IDIV", alu.decode_group3),

    # --- Control ---
    **{op: OpcodeEntry("conditional jump", control.decode_jcc) for op in range(0x70, 0x80)},
    0xE8: OpcodeEntry("CALL", control.decode_branch_rel32),
    0xE9: OpcodeEntry("JMP", control.decode_branch_rel32),
    0xEB: OpcodeEntry("JMP rel8", control.decode_jmp_rel8),
    0xE0: OpcodeEntry("LOOPNZ", control.decode_loop),
    0xE1: OpcodeEntry("LOOPZ", control.decode_loop),
    0xE2: OpcodeEntry("LOOP", control.decode_loop),
    0xE3: OpcodeEntry("JECXZ", control.decode_loop),
    0x90: OpcodeEntry("NOP", partial(control.decode_fixed, mnemonic="NOP")),
    0xC3: OpcodeEntry("RET", partial(control.decode_fixed, mnemonic="RET")),
    0xCC: OpcodeEntry("INT3", partial(control.decode_fixed, mnemonic="INT3")),
    0xFF: OpcodeEntry("FF instruction", control.decode_group5),

    # --- Prefixes ---
    0xF0: OpcodeEntry("LOCK", control.decode_prefix),
    0xF2: OpcodeEntry("REPNZ", control.decode_prefix),
    0xF3: OpcodeEntry("REP instruction", control.decode_prefix),
}

# @intent:map REP (0xF3) の直後のバイトに適用される制限付きマップ。MOVSB / MOVSD のみ。
REP_DECODE_MAP: Dict[int, OpcodeEntry] = {
    0xA4: DECODE_MAP[0xA4],
    0xA5: DECODE_MAP[0xA5],
}

# 未知オペコードのマーカー書式 (opcode で format される)
UNKNOWN_FORMAT = "Unknown instruction: 0x{opcode:02x}"
UNKNOWN_REP_FORMAT = "Unknown REP instruction"

# @intent:map プレフィックスのオペコードから、次のバイトのディスパッチに使う (マップ, 未知書式) への対応表。
# LOCK / REPNZ は通常のマップで再ディスパッチされるため登録しません。
PREFIX_MAPS: Dict[int, Tuple[Dict[int, OpcodeEntry], str]] = {
    0xF3: (REP_DECODE_MAP, UNKNOWN_REP_FORMAT),
}
