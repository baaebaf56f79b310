# ia32_disasm/core/operation.py
"""
デコード結果の不変データ構造

このモジュールは、1命令（またはプレフィックス、エラーマーカー）のデコード結果を
記録する不変のデータ構造を定義します。フォーマッタへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# @intent:responsibility デコード結果の種別を定義します。
class InstructionKind(Enum):
    INSTRUCTION = "INSTRUCTION"  # 正常にデコードされた命令
    PREFIX = "PREFIX"            # LOCK / REP / REPNZ プレフィックス
    UNKNOWN = "UNKNOWN"          # 未知のオペコード / サブオペコード
    TRUNCATED = "TRUNCATED"      # バイト不足。デコードパスはここで終了する


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class DecodedInstruction:
    """
    デコードされた命令の詳細（開始アドレス、ニーモニック、オペランド、バイト長）を記録するデータクラス。
    """
    offset: int # 表示用アドレス
    mnemonic: str # 例: "MOV"
    operands: Tuple[str, ...] = () # 例: ("EAX", "0x12345678")
    length: int = 1 # 消費したバイト長
    kind: InstructionKind = InstructionKind.INSTRUCTION
    raw: bytes = b"" # 消費した生バイト

    # @intent:rationale 命令は必ず1バイト以上を消費する。デコードループの前進を保証するための不変条件。
    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Decoded instruction at {self.offset:#06x} must consume at least 1 byte.")
        # リストで渡されたオペランドもタプルとして保持する
        object.__setattr__(self, "operands", tuple(self.operands))

    @property
    def text(self) -> str:
        """ニーモニックとオペランドを連結した表示用文字列。"""
        if not self.operands:
            return self.mnemonic
        return f"{self.mnemonic} " + ", ".join(self.operands)

    @property
    def end(self) -> int:
        """次の命令の表示用アドレス。"""
        return self.offset + self.length
