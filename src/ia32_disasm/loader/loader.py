# ia32_disasm/loader/loader.py
"""
コードローダーモジュール。
生バイナリおよび Intel HEX 形式のロードをサポートします。
"""
from typing import Dict, NamedTuple

# 隙間を埋めた Intel HEX イメージの上限サイズ (16 MiB)
MAX_IMAGE_SIZE = 1 << 24


# @intent:data_structure ロードされたイメージ。base_address はイメージ先頭バイトのアドレスです。
class LoadedImage(NamedTuple):
    base_address: int
    data: bytes


# @intent:responsibility レコード単位の検証エラー (チェックサム不一致、未知のレコード種別) を表します。
# @intent:rationale 行番号付きの汎用パースエラーで包まずに、そのまま呼び出し元へ伝播させます。
class IntelHexRecordError(ValueError):
    pass


class RawBinaryLoader:
    """
    ファイル全体を機械語バイト列として読み込むローダー。
    """
    def load_binary(self, file_path: str) -> LoadedImage:
        with open(file_path, 'rb') as f:
            data = f.read()
        return LoadedImage(base_address=0, data=data)


class IntelHexLoader:
    """
    Intel HEX形式のファイルを解析し、連続したバイトイメージに変換するローダー。
    """
    # @intent:responsibility Intel HEX ファイルを読み込み、最小アドレスを起点とするイメージを返します。
    # @intent:rationale レコード間の隙間は fill バイトで埋め、逆アセンブラには連続バッファとして渡します。
    #                  隙間を含めたイメージが max_size を超える場合は ValueError とします。
    def load_intel_hex(self, file_path: str, fill: int = 0x00,
                       max_size: int = MAX_IMAGE_SIZE) -> LoadedImage:
        if not 0 <= fill <= 0xFF:
            raise ValueError(f"Fill value {fill} is not an 8-bit value.")

        memory: Dict[int, int] = {}
        current_extended_linear_address = 0x0000

        with open(file_path, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or not line.startswith(':'):
                    continue

                comment_start = line.find(';')
                if comment_start != -1:
                    line = line[:comment_start].strip()

                if len(line) < 11:
                    raise ValueError(f"Invalid Intel HEX record format on line {line_num}: Too short - {line}")

                try:
                    data_length = int(line[1:3], 16)
                    address_field = int(line[3:7], 16)
                    record_type = int(line[7:9], 16)
                    data = bytes.fromhex(line[9:-2])
                    checksum_field = int(line[-2:], 16)
                except ValueError as e:
                    raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - {e}") from e

                if len(data) != data_length:
                    raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - Data length mismatch")

                checksum_sum = data_length + (address_field >> 8) + (address_field & 0xFF) + record_type + sum(data)
                calculated_checksum = (~checksum_sum + 1) & 0xFF
                if calculated_checksum != checksum_field:
                    raise IntelHexRecordError(f"Checksum mismatch on line {line_num}: Calculated {calculated_checksum:02X}, Expected {checksum_field:02X}")

                if record_type == 0x00:
                    load_address = (current_extended_linear_address + address_field) & 0xFFFFFFFF
                    for i, value in enumerate(data):
                        memory[load_address + i] = value
                elif record_type == 0x01:
                    break
                elif record_type in (0x02, 0x04):
                    if data_length != 2:
                        raise ValueError(f"Extended address record on line {line_num} must carry 2 data bytes, got {data_length}")
                    shift = 16 if record_type == 0x04 else 4
                    current_extended_linear_address = int.from_bytes(data, "big") << shift
                elif record_type == 0x03 or record_type == 0x05:
                    pass
                else:
                    raise IntelHexRecordError(f"Unknown Intel HEX record type {record_type:02X} on line {line_num}")

        if not memory:
            return LoadedImage(base_address=0, data=b"")

        base = min(memory)
        size = max(memory) - base + 1
        if size > max_size:
            raise ValueError(
                f"Intel HEX image spans {size:#x} bytes from {base:#x}, exceeding the limit of {max_size:#x} bytes."
            )
        image = bytearray([fill]) * size
        for address, value in memory.items():
            image[address - base] = value
        return LoadedImage(base_address=base, data=bytes(image))
