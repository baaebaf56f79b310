"""
x86 データ転送命令（MOV, LEA, PUSH/POP, XCHG, MOVZX/MOVSX, ストリング命令）のデコード。
"""
from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind
from ia32_disasm.arch.x86.operands import get_register_name
from .base import (
    read_modrm, decode_operand, read_immediate, reg_name, build_instruction
)

# @intent:responsibility 0x88-0x8B (MOV r/m, reg / MOV reg, r/m) をデコードします。
def decode_mov_rm(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """方向ビット (opcode & 2) が立っていれば reg が転送先になります。"""
    modrm = read_modrm(stream)
    rm = str(decode_operand(modrm, stream))
    if opcode & 0x02:
        operands = [reg_name(modrm), rm]
    else:
        operands = [rm, reg_name(modrm)]
    return build_instruction(stream, start, "MOV", operands)

# @intent:responsibility 0xB0-0xBF (MOV reg, imm8 / imm32) をデコードします。
def decode_mov_reg_imm(opcode: int, stream: InstructionStream, start: int, width: int = 32) -> DecodedInstruction:
    imm = read_immediate(stream, width)
    return build_instruction(stream, start, "MOV", [get_register_name(opcode), str(imm)])

# @intent:responsibility 0xC6 / 0xC7 (MOV r/m, imm) をデコードします。ModR/M の後に即値が続きます。
def decode_mov_rm_imm(opcode: int, stream: InstructionStream, start: int, width: int = 32) -> DecodedInstruction:
    modrm = read_modrm(stream)
    rm = decode_operand(modrm, stream)
    imm = read_immediate(stream, width)
    return build_instruction(stream, start, "MOV", [str(rm), str(imm)])

# @intent:responsibility 0x8D (LEA reg, m) をデコードします。
# @intent:note r/m 側は常にメモリ参照として扱う (force_memory)。
def decode_lea(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    modrm = read_modrm(stream)
    memory = decode_operand(modrm, stream, force_memory=True)
    return build_instruction(stream, start, "LEA", [reg_name(modrm), str(memory)])

def decode_push_pop_reg(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """0x50-0x57 PUSH reg, 0x58-0x5F POP reg"""
    mnemonic = "POP" if opcode & 0x08 else "PUSH"
    return build_instruction(stream, start, mnemonic, [get_register_name(opcode)])

def decode_push_imm(opcode: int, stream: InstructionStream, start: int, width: int = 32) -> DecodedInstruction:
    """0x68 PUSH imm32, 0x6A PUSH imm8"""
    imm = read_immediate(stream, width)
    return build_instruction(stream, start, "PUSH", [str(imm)])

def decode_xchg(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    modrm = read_modrm(stream)
    rm = decode_operand(modrm, stream)
    return build_instruction(stream, start, "XCHG", [str(rm), reg_name(modrm)])

def decode_string_op(opcode: int, stream: InstructionStream, start: int, mnemonic: str = "") -> DecodedInstruction:
    return build_instruction(stream, start, mnemonic)

# --- Two-byte opcodes (0x0F xx) ---

# @intent:responsibility 0x0F B6/B7/BE/BF (MOVZX / MOVSX) をデコードします。
# @intent:pre-condition エスケープバイト 0x0F と2バイト目は既に消費済みであること。
def decode_movx(second: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    mnemonic = "MOVSX" if second & 0x08 else "MOVZX"
    modrm = read_modrm(stream)
    source = str(decode_operand(modrm, stream))
    if not second & 0x01:
        source = f"BYTE PTR {source}"
    return build_instruction(stream, start, mnemonic, [reg_name(modrm), source])

TWO_BYTE_MAP = {
    0xB6: decode_movx,
    0xB7: decode_movx,
    0xBE: decode_movx,
    0xBF: decode_movx,
}

# @intent:responsibility 0x0F エスケープをデコードします。
# @intent:rationale 2バイト目は peek で確認してから消費する。未知の2バイト目の場合は
#                  エスケープバイトのみを消費し、2バイト目は次の命令として再ディスパッチされます。
def decode_two_byte(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    second = stream.peek(1, "opcode")[0]
    decoder = TWO_BYTE_MAP.get(second)
    if decoder is None:
        return build_instruction(stream, start, "Unknown 0F instruction", kind=InstructionKind.UNKNOWN)
    stream.read_u8("opcode")
    return decoder(second, stream, start)
