"""
x86 算術・論理命令（ADD..CMP, INC/DEC, TEST, シフト/ローテート, グループ3）のデコード。
"""
from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction
from ia32_disasm.arch.x86.operands import get_register_name
from .base import (
    ARITH_MNEMONICS, SHIFT_MNEMONICS, GROUP3_MNEMONICS,
    read_modrm, decode_operand, read_immediate, reg_name, build_instruction
)

# @intent:responsibility 0x00-0x3D の ModR/M 形式算術命令をデコードします。
# @intent:note 演算の種類はオペコードのビット 3-5、方向はビット 1 で決まります。
def decode_arith_rm(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    mnemonic = ARITH_MNEMONICS[(opcode >> 3) & 0x7]
    modrm = read_modrm(stream)
    rm = str(decode_operand(modrm, stream))
    if opcode & 0x02:
        operands = [reg_name(modrm), rm]
    else:
        operands = [rm, reg_name(modrm)]
    return build_instruction(stream, start, mnemonic, operands)

# @intent:responsibility 0x80 / 0x81 / 0x83 (グループ1 即値演算) をデコードします。
def decode_arith_imm(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """演算の種類は ModR/M.reg で選択。0x81 のみ imm32、他は imm8。"""
    modrm = read_modrm(stream)
    rm = decode_operand(modrm, stream)
    imm = read_immediate(stream, 32 if opcode == 0x81 else 8)
    return build_instruction(stream, start, ARITH_MNEMONICS[modrm.reg], [str(rm), str(imm)])

def decode_inc_dec_reg(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """0x40-0x47 INC reg, 0x48-0x4F DEC reg"""
    mnemonic = "DEC" if opcode & 0x08 else "INC"
    return build_instruction(stream, start, mnemonic, [get_register_name(opcode)])

def decode_test_rm(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    modrm = read_modrm(stream)
    rm = decode_operand(modrm, stream)
    return build_instruction(stream, start, "TEST", [str(rm), reg_name(modrm)])

# @intent:responsibility 0xC0/0xC1/0xD0-0xD3 (シフト/ローテート) をデコードします。
def decode_shift(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """
    シフト量は 0xC0/0xC1 が即値バイト、0xD0/0xD1 が 1、0xD2/0xD3 が CL レジスタです。
    """
    modrm = read_modrm(stream)
    rm = decode_operand(modrm, stream)
    if opcode in (0xD2, 0xD3):
        count = "CL"
    elif opcode in (0xC0, 0xC1):
        count = str(read_immediate(stream, 8))
    else:
        count = "1"
    return build_instruction(stream, start, SHIFT_MNEMONICS[modrm.reg], [str(rm), count])

# @intent:responsibility 0xF6 / 0xF7 (TEST/NOT/NEG/MUL/IMUL/DIV/IDIV) をデコードします。
# @intent:note TEST (reg 0/1) のみ即値を伴う。0xF6 は imm8、0xF7 は imm32。
def decode_group3(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    modrm = read_modrm(stream)
    operands = [str(decode_operand(modrm, stream))]
    if modrm.reg in (0, 1):
        operands.append(str(read_immediate(stream, 8 if opcode == 0xF6 else 32)))
    return build_instruction(stream, start, GROUP3_MNEMONICS[modrm.reg], operands)
