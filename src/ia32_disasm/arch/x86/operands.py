# src/ia32_disasm/arch/x86/operands.py
"""
x86 オペランドの構造化表現。

各オペランドは不変データクラスとして表現され、str() で表示用テキストに変換されます。
"""
from dataclasses import dataclass
from typing import Optional, Union

from ia32_disasm.common.types import REGISTER_NAMES


# @intent:utility_function 指定されたレジスタコードに対応するレジスタ名を返します。
# @intent:rationale 既定では下位3ビットでマスクする（参照出力との互換）。
#                  strict=True の場合は範囲外のコードを ValueError として報告します。
def get_register_name(code: int, strict: bool = False) -> str:
    if strict and not 0 <= code <= 7:
        raise ValueError(f"Register code {code} is out of range (0-7).")
    return REGISTER_NAMES[code & 0x7]


def format_displacement(value: int, leading: bool) -> str:
    """符号付き変位を "+ 0x10" / "- 0x1" 形式で返す。leading=False なら区切りなし。"""
    if leading:
        return f" - 0x{-value:x}" if value < 0 else f" + 0x{value:x}"
    return f"-0x{-value:x}" if value < 0 else f"0x{value:x}"


@dataclass(frozen=True)
class RegisterOperand:
    code: int

    def __str__(self) -> str:
        return get_register_name(self.code)


# @intent:responsibility メモリ参照オペランド [base + index*scale +/- disp] を表現します。
@dataclass(frozen=True)
class MemoryOperand:
    base: Optional[int] = None # None: ベースレジスタなし (disp32 絶対アドレス)
    index: Optional[int] = None # None: インデックスなし (SIB.index == 4)
    scale: int = 1 # 1, 2, 4, 8
    displacement: Optional[int] = None # None: 変位バイトなし

    def __str__(self) -> str:
        text = ""
        if self.base is not None:
            text = get_register_name(self.base)
        if self.index is not None:
            if text:
                text += " + "
            text += get_register_name(self.index)
            if self.scale > 1:
                text += f"*{self.scale}"
        if self.displacement is not None:
            text += format_displacement(self.displacement, leading=bool(text))
        return f"[{text}]"


@dataclass(frozen=True)
class ImmediateOperand:
    value: int
    width: int # 8 or 32

    def __str__(self) -> str:
        mask = (1 << self.width) - 1
        return f"0x{self.value & mask:0{self.width // 4}x}"


# @intent:responsibility 相対分岐の解決済みターゲットを表現します。
# @intent:note target は「次の命令のアドレス + 符号付き変位」。表示は width ビットで折り返します。
@dataclass(frozen=True)
class RelativeOperand:
    target: int
    width: int # 8 or 32

    def __str__(self) -> str:
        mask = (1 << self.width) - 1
        return f"0x{self.target & mask:0{self.width // 4}x}"


Operand = Union[RegisterOperand, MemoryOperand, ImmediateOperand, RelativeOperand]
