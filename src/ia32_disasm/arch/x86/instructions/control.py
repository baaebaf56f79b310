"""
x86 制御命令（分岐、CALL/JMP、LOOP、グループ5、プレフィックス、オペランドなし命令）のデコード。
"""
from ia32_disasm.transport.stream import InstructionStream
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind
from ia32_disasm.common.types import CONDITION_NAMES
from ia32_disasm.arch.x86.operands import ImmediateOperand, RelativeOperand
from .base import read_modrm, decode_operand, build_instruction

# --- Decoding Functions ---

# @intent:responsibility オペランドを持たない1バイト命令 (NOP, RET, INT3) をデコードします。
def decode_fixed(opcode: int, stream: InstructionStream, start: int, mnemonic: str = "") -> DecodedInstruction:
    return build_instruction(stream, start, mnemonic)

# @intent:responsibility 0x70-0x7F (Jcc rel8) をデコードします。
# @intent:note オペランドは分岐先ではなく rel8 の生バイトをそのまま表示します。
def decode_jcc(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """条件名はオペコードの下位4ビットで選択します。"""
    rel = stream.read_u8("rel8")
    mnemonic = "J" + CONDITION_NAMES[opcode & 0xF]
    return build_instruction(stream, start, mnemonic, [str(ImmediateOperand(rel, 8))])

# @intent:responsibility 0xE8 (CALL rel32) / 0xE9 (JMP rel32) をデコードします。
def decode_branch_rel32(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """分岐先 = 次の命令のアドレス + 符号付き変位 (32ビットで折り返し)。"""
    delta = stream.read_i32_le("rel32")
    target = RelativeOperand(stream.address + delta, 32)
    mnemonic = "CALL" if opcode == 0xE8 else "JMP"
    return build_instruction(stream, start, mnemonic, [str(target)])

def decode_jmp_rel8(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    """0xEB JMP rel8。生バイトを表示します。"""
    rel = stream.read_u8("rel8")
    return build_instruction(stream, start, "JMP", [str(ImmediateOperand(rel, 8))])

LOOP_MNEMONICS = ("LOOPNZ", "LOOPZ", "LOOP", "JECXZ")

# @intent:responsibility 0xE0-0xE3 (LOOPNZ/LOOPZ/LOOP/JECXZ rel8) をデコードします。
# @intent:note LOOP (0xE2) のみ分岐先を解決し、下位8ビットを表示します。他は生バイト表示です。
def decode_loop(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    mnemonic = LOOP_MNEMONICS[opcode & 0x3]
    if opcode == 0xE2:
        delta = stream.read_i8("rel8")
        operand = str(RelativeOperand(stream.address + delta, 8))
    else:
        operand = str(ImmediateOperand(stream.read_u8("rel8"), 8))
    return build_instruction(stream, start, mnemonic, [operand])

GROUP5_MNEMONICS = {0: "INC", 1: "DEC", 2: "CALL", 4: "JMP"}

# @intent:responsibility 0xFF (グループ5: INC/DEC/CALL/JMP r/m) をデコードします。
# @intent:note 未対応のサブオペコードでは ModR/M までを消費し、SIB・変位バイトは読み飛ばしません。
def decode_group5(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    modrm = read_modrm(stream)
    mnemonic = GROUP5_MNEMONICS.get(modrm.reg)
    if mnemonic is None:
        return build_instruction(stream, start, "Unknown FF instruction", kind=InstructionKind.UNKNOWN)
    operand = decode_operand(modrm, stream)
    return build_instruction(stream, start, mnemonic, [str(operand)])

# --- Prefixes ---

PREFIX_MNEMONICS = {0xF0: "LOCK", 0xF2: "REPNZ", 0xF3: "REP"}

# @intent:responsibility プレフィックスバイトを単独の行として出力するマーカーを生成します。
# @intent:rationale REP の場合は後続バイトの存在を先に確認し、末尾の REP はバイト不足として報告します。
def decode_prefix(opcode: int, stream: InstructionStream, start: int) -> DecodedInstruction:
    if opcode == 0xF3:
        stream.peek(1, "opcode")
    return build_instruction(stream, start, PREFIX_MNEMONICS[opcode], kind=InstructionKind.PREFIX)
