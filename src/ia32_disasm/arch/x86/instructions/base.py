# src/ia32_disasm/arch/x86/instructions/base.py
"""
x86 命令デコード用の共通ユーティリティ。
ModR/M・SIB の解析、即値・変位の読み取り、DecodedInstruction の生成を担います。
"""
from dataclasses import dataclass
from typing import List, Optional

from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind
from ia32_disasm.arch.x86.operands import (
    Operand, RegisterOperand, MemoryOperand, ImmediateOperand, get_register_name
)

# @intent:data_structure グループ命令のニーモニック表。ModR/M.reg またはオペコードのビットで引きます。
ARITH_MNEMONICS = ("ADD", "OR", "ADC", "SBB", "AND", "SUB", "XOR", "CMP")
SHIFT_MNEMONICS = ("ROL", "ROR", "RCL", "RCR", "SHL", "SHR", "SAL", "SAR")
GROUP3_MNEMONICS = ("TEST", "TEST", "NOT", "NEG", "MUL", "IMUL", "DIV", "IDIV")


# @intent:data_structure ModR/M バイトから抽出したフィールド。
@dataclass(frozen=True)
class ModRM:
    mod: int
    reg: int
    rm: int

    @classmethod
    def from_byte(cls, value: int) -> "ModRM":
        return cls(mod=(value >> 6) & 0x3, reg=(value >> 3) & 0x7, rm=value & 0x7)


# @intent:data_structure SIB バイトから抽出したフィールド。index == 4 は「インデックスなし」。
@dataclass(frozen=True)
class SIB:
    scale: int
    index: int
    base: int

    @classmethod
    def from_byte(cls, value: int) -> "SIB":
        return cls(scale=(value >> 6) & 0x3, index=(value >> 3) & 0x7, base=value & 0x7)

    @property
    def multiplier(self) -> int:
        return 1 << self.scale


def read_modrm(stream: InstructionStream) -> ModRM:
    return ModRM.from_byte(stream.read_u8("ModR/M"))


# @intent:responsibility ModR/M の r/m 側オペランドをデコードし、SIB・変位バイトを消費します。
# @intent:pre-condition ストリームのカーソルは ModR/M バイトの直後を指している必要があります。
# @intent:post-condition mod == 3 の場合、バイトは一切消費されません。
def decode_operand(modrm: ModRM, stream: InstructionStream, force_memory: bool = False) -> Operand:
    """
    r/m オペランドをデコードします。

    mod == 3 ならレジスタ、それ以外はメモリ参照を返します。
    force_memory=True (LEA) の場合、mod == 3 でもベースレジスタのみのメモリ参照として表現します。
    バイト不足の場合は TruncatedError（field は "SIB" / "disp8" / "disp32"）を送出します。
    """
    if modrm.mod == 3:
        if force_memory:
            return MemoryOperand(base=modrm.rm)
        return RegisterOperand(modrm.rm)

    base: Optional[int] = modrm.rm
    index: Optional[int] = None
    scale = 1
    absolute = False

    if modrm.rm == 4:
        sib = SIB.from_byte(stream.read_u8("SIB"))
        if modrm.mod == 0 and sib.base == 5:
            base = None
            absolute = True
        else:
            base = sib.base
        if sib.index != 4:
            index = sib.index
            scale = sib.multiplier
    elif modrm.mod == 0 and modrm.rm == 5:
        base = None
        absolute = True

    displacement: Optional[int] = None
    if modrm.mod == 1:
        displacement = stream.read_i8("disp8")
    elif modrm.mod == 2 or absolute:
        displacement = stream.read_i32_le("disp32")

    return MemoryOperand(base=base, index=index, scale=scale, displacement=displacement)


# @intent:utility_function 8 / 32 ビットの即値を読み取ります。
def read_immediate(stream: InstructionStream, width: int) -> ImmediateOperand:
    if width == 8:
        return ImmediateOperand(stream.read_u8("imm8"), 8)
    return ImmediateOperand(stream.read_u32_le("imm32"), 32)


def reg_name(modrm: ModRM) -> str:
    """ModR/M.reg フィールドのレジスタ名。"""
    return get_register_name(modrm.reg)


# @intent:responsibility 開始位置から現在のカーソルまでを1命令として DecodedInstruction を生成します。
def build_instruction(stream: InstructionStream, start: int, mnemonic: str,
                      operands: Optional[List[str]] = None,
                      kind: InstructionKind = InstructionKind.INSTRUCTION) -> DecodedInstruction:
    raw = stream.slice(start)
    return DecodedInstruction(
        offset=stream.origin + start,
        mnemonic=mnemonic,
        operands=tuple(operands or ()),
        length=len(raw),
        kind=kind,
        raw=raw,
    )
