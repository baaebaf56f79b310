# tests/core/test_operation.py
"""
ia32_disasm.core.operationモジュールの単体テスト。
"""
import pytest
from ia32_disasm.core.operation import DecodedInstruction, InstructionKind

# @intent:test_suite デコード結果を記録する不変データ構造の検証。

class TestInstructionKind:
    # @intent:test_case_enum InstructionKindのメンバーが正しく定義されていることを検証します。
    def test_members(self):
        assert InstructionKind.INSTRUCTION.value == "INSTRUCTION"
        assert InstructionKind.PREFIX.value == "PREFIX"
        assert InstructionKind.UNKNOWN.value == "UNKNOWN"
        assert InstructionKind.TRUNCATED.value == "TRUNCATED"

class TestDecodedInstruction:
    """
    DecodedInstructionデータクラスの単体テスト。
    """
    # @intent:test_case_text オペランド付きの表示文字列を検証します。
    def test_text_with_operands(self):
        instr = DecodedInstruction(offset=1, mnemonic="MOV", operands=["EAX", "0x12345678"], length=5)
        assert instr.text == "MOV EAX, 0x12345678"
        assert instr.end == 6
        assert instr.kind is InstructionKind.INSTRUCTION

    def test_text_without_operands(self):
        instr = DecodedInstruction(offset=0, mnemonic="NOP")
        assert instr.text == "NOP"
        assert instr.operands == ()
        assert instr.length == 1

    # @intent:test_case_immutability DecodedInstructionが不変であることを検証します。
    def test_immutability(self):
        instr = DecodedInstruction(offset=0, mnemonic="RET")
        with pytest.raises(AttributeError):
            instr.mnemonic = "NOP"

    # @intent:test_case_forward_progress 長さ0の命令は生成できないことを検証します。
    def test_zero_length_rejected(self):
        with pytest.raises(ValueError):
            DecodedInstruction(offset=0, mnemonic="NOP", length=0)

    # @intent:test_case_hashable オペランドはタプルとして保持され、命令はハッシュ可能であることを検証します。
    def test_operands_stored_as_tuple(self):
        operands = ["EAX", "ECX"]
        instr = DecodedInstruction(offset=0, mnemonic="ADD", operands=operands, length=2)
        operands.append("EDX")
        assert instr.operands == ("EAX", "ECX")
        assert instr.text == "ADD EAX, ECX"
        assert hash(instr) == hash(DecodedInstruction(offset=0, mnemonic="ADD", operands=("EAX", "ECX"), length=2))
