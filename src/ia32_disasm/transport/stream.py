# ia32_disasm/transport/stream.py
"""
Transport Layer (バイトストリーム)

このモジュールは、入力バッファへの読み取り専用ビューと、単調に進むカーソルを提供します。
デコーダの全コンポーネントはこのストリームを介してバイトを読み取ります。
"""
from typing import Optional


# @intent:responsibility 必要なバイト数が残っていないことを通知します。
# @intent:rationale IndexErrorの派生とし、範囲外アクセスとして既存の例外処理でも捕捉できるようにします。
class TruncatedError(IndexError):
    """
    フィールドの読み取りに必要なバイトが不足していることを表す例外。
    `field` は不足したフィールド名 ("ModR/M", "SIB", "disp32", "imm8" など) です。
    """
    def __init__(self, field: str, position: int, needed: int, available: int):
        super().__init__(
            f"{field} truncated at position {position:#06x}: "
            f"needed {needed} byte(s), {available} available."
        )
        self.field = field
        self.position = position
        self.needed = needed
        self.available = available


# @intent:responsibility 入力バッファとカーソル位置を保持し、境界チェック付きの読み取りを提供します。
# @intent:invariant 0 <= position <= len(data)。カーソルは後退しません。
class InstructionStream:
    """
    不変のバイトバッファと、前進のみのカーソルを保持するストリーム。
    バッファ末尾を越える読み取りは、値を返す前に TruncatedError を送出します。
    """
    # @intent:pre-condition `origin` は表示用のベースアドレスで、非負である必要があります。
    def __init__(self, data: bytes, origin: int = 0):
        if origin < 0:
            raise ValueError("Stream origin must be non-negative.")
        self._data = bytes(data)
        self._position = 0
        self._origin = origin

    def __len__(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        """バッファ先頭からのカーソル位置。"""
        return self._position

    @property
    def origin(self) -> int:
        return self._origin

    @property
    def address(self) -> int:
        """カーソル位置に対応する表示用アドレス (origin + position)。"""
        return self._origin + self._position

    def remaining(self) -> int:
        return len(self._data) - self._position

    def at_end(self) -> bool:
        return self._position >= len(self._data)

    # @intent:responsibility n バイトが残っていることを確認します。不足時は TruncatedError。
    def _require(self, n: int, field: str) -> None:
        available = self.remaining()
        if n > available:
            raise TruncatedError(field, self._position, n, available)

    # @intent:responsibility カーソルを進めずに n バイトを読み取ります。
    # @intent:rationale デコード分岐を確定する前に、後続バイトの存在と値を確認するために使用します。
    def peek(self, n: int = 1, field: str = "byte") -> bytes:
        self._require(n, field)
        return self._data[self._position:self._position + n]

    def read_bytes(self, n: int, field: str = "byte") -> bytes:
        self._require(n, field)
        chunk = self._data[self._position:self._position + n]
        self._position += n
        return chunk

    def read_u8(self, field: str = "byte") -> int:
        return self.read_bytes(1, field)[0]

    def read_i8(self, field: str = "byte") -> int:
        return int.from_bytes(self.read_bytes(1, field), "little", signed=True)

    # @intent:utility_function 32ビット値をリトルエンディアンで読み取ります。
    def read_u32_le(self, field: str = "dword") -> int:
        return int.from_bytes(self.read_bytes(4, field), "little", signed=False)

    def read_i32_le(self, field: str = "dword") -> int:
        return int.from_bytes(self.read_bytes(4, field), "little", signed=True)

    # @intent:responsibility 既に読み取り済みの範囲を生バイトとして返します（カーソルは変化しません）。
    def slice(self, start: int, end: Optional[int] = None) -> bytes:
        if end is None:
            end = self._position
        if not 0 <= start <= end <= len(self._data):
            raise ValueError(f"Invalid slice range: {start}..{end} for stream of {len(self._data)} bytes.")
        return self._data[start:end]
