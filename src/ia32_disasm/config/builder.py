from typing import List

from ia32_disasm.loader.loader import LoadedImage, RawBinaryLoader, IntelHexLoader
from ia32_disasm.arch.x86.disassembler import format_listing
from .models import DisassemblerConfig

# @intent:responsibility 設定（Config）に基づいて入力をロードし、逆アセンブルリスティングを生成します。
class ListingBuilder:
    def load_image(self, config: DisassemblerConfig, path: str) -> LoadedImage:
        if config.input_format == "raw":
            return RawBinaryLoader().load_binary(path)
        elif config.input_format == "ihex":
            return IntelHexLoader().load_intel_hex(path, fill=config.fill_byte)
        else:
            raise ValueError(f"Unsupported input format: {config.input_format}")

    # @intent:responsibility イメージをロードし、設定された範囲を "%04x: TEXT" 行のリストに変換します。
    # @intent:rationale origin が未指定の場合はイメージのベースアドレスを表示の起点とします。
    def build_listing(self, config: DisassemblerConfig, path: str) -> List[str]:
        image = self.load_image(config, path)
        origin = image.base_address if config.origin is None else config.origin
        return format_listing(
            image.data,
            start=config.start,
            length=config.length,
            origin=origin,
            show_bytes=config.show_bytes,
        )
