# tests/loader/test_loader.py
"""
ia32_disasm.loader.loaderモジュールの単体テスト。
生バイナリと Intel HEX ファイルのロード機能を検証します。
"""
import pytest

from ia32_disasm.loader.loader import LoadedImage, RawBinaryLoader, IntelHexLoader, IntelHexRecordError

# @intent:test_suite コードローダー機能の検証。

class TestRawBinaryLoader:
    def test_load_binary(self, tmp_path):
        path = tmp_path / "code.bin"
        path.write_bytes(bytes([0x90, 0xC3]))

        image = RawBinaryLoader().load_binary(str(path))

        assert image == LoadedImage(base_address=0, data=bytes([0x90, 0xC3]))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            RawBinaryLoader().load_binary(str(tmp_path / "missing.bin"))


class TestIntelHexLoader:
    """
    IntelHexLoaderの単体テスト。
    """

    @pytest.fixture
    def write_hex(self, tmp_path):
        def _write(content, name="image.hex"):
            hex_file = tmp_path / name
            hex_file.write_text(content)
            return str(hex_file)
        return _write

    def test_load_simple_hex_data(self, write_hex):
        path = write_hex("""
        :020000001234B8
        :02000200ABCD84
        :00000001FF
        """)

        image = IntelHexLoader().load_intel_hex(path)

        assert image.base_address == 0x0000
        assert image.data == bytes([0x12, 0x34, 0xAB, 0xCD])

    def test_load_multiple_records(self, write_hex):
        path = write_hex("""
        :03000000AABBCCCC
        :02000300DDEE30
        :00000001FF
        """)

        image = IntelHexLoader().load_intel_hex(path)

        assert image.data == bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE])

    # @intent:test_case_base_address イメージは最小アドレスを起点とすることを検証します。
    def test_load_extended_linear_address_hex(self, write_hex):
        path = write_hex("""
        :020000040001F9 ; Set ELA to 0x0001xxxx
        :021000001234A8
        :00000001FF
        """)

        image = IntelHexLoader().load_intel_hex(path)

        assert image.base_address == 0x11000
        assert image.data == bytes([0x12, 0x34])

    def test_load_extended_segment_address_hex(self, write_hex):
        path = write_hex("""
        :020000021000EC
        :01000000906F
        :00000001FF
        """)

        image = IntelHexLoader().load_intel_hex(path)

        assert image.base_address == 0x10000
        assert image.data == bytes([0x90])

    # @intent:test_case_gap_fill レコード間の隙間が fill バイトで埋められることを検証します。
    def test_gaps_are_filled(self, write_hex):
        path = write_hex(":01000000906F\n:01001000C32C\n:00000001FF\n")

        image = IntelHexLoader().load_intel_hex(path, fill=0xCC)

        assert len(image.data) == 0x11
        assert image.data[0] == 0x90
        assert image.data[0x10] == 0xC3
        assert image.data[1:0x10] == bytes([0xCC]) * 0x0F

    def test_records_after_eof_are_ignored(self, write_hex):
        path = write_hex(":01000000906F\n:00000001FF\n:01001000C32C\n")

        image = IntelHexLoader().load_intel_hex(path)

        assert image.data == bytes([0x90])

    def test_empty_image(self, write_hex):
        path = write_hex(":00000001FF\n")

        image = IntelHexLoader().load_intel_hex(path)

        assert image == LoadedImage(base_address=0, data=b"")

    def test_load_invalid_checksum(self, write_hex):
        path = write_hex(":020000001234B9 ; Checksum should be B8, but it's B9\n")

        with pytest.raises(IntelHexRecordError, match="Checksum mismatch on line 1"):
            IntelHexLoader().load_intel_hex(path)

    def test_unknown_record_type(self, write_hex):
        path = write_hex(":00000006FA\n")

        with pytest.raises(IntelHexRecordError, match="Unknown Intel HEX record type 06"):
            IntelHexLoader().load_intel_hex(path)

    def test_data_length_mismatch(self, write_hex):
        path = write_hex(":03000000AABBCC\n")

        with pytest.raises(ValueError, match="Error parsing Intel HEX line 1"):
            IntelHexLoader().load_intel_hex(path)

    def test_too_short_record(self, write_hex):
        path = write_hex(":0000\n")

        with pytest.raises(ValueError, match="Too short"):
            IntelHexLoader().load_intel_hex(path)

    def test_invalid_fill_value(self, write_hex):
        path = write_hex(":00000001FF\n")

        with pytest.raises(ValueError):
            IntelHexLoader().load_intel_hex(path, fill=0x100)

    # @intent:test_case_image_limit 離れたレコード間の隙間で巨大なイメージを作らないことを検証します。
    def test_distant_records_exceed_image_limit(self, write_hex):
        path = write_hex("""
        :01000000906F
        :020000041000EA ; ELA 0x1000xxxx
        :01000000C33C
        :00000001FF
        """)

        with pytest.raises(ValueError, match="exceeding the limit"):
            IntelHexLoader().load_intel_hex(path)

    def test_custom_image_limit(self, write_hex):
        path = write_hex(":01000000906F\n:01001000C32C\n:00000001FF\n")

        with pytest.raises(ValueError, match="exceeding the limit"):
            IntelHexLoader().load_intel_hex(path, max_size=0x10)
        assert len(IntelHexLoader().load_intel_hex(path, max_size=0x11).data) == 0x11

    def test_record_errors_are_value_errors(self):
        assert issubclass(IntelHexRecordError, ValueError)

    # @intent:test_case_extended_address 拡張アドレスレコードは2バイトのデータのみ受け付けます。
    @pytest.mark.parametrize("record", [
        ":0400000400010000F7",
        ":0100000210ED",
    ])
    def test_extended_address_record_length(self, write_hex, record):
        path = write_hex(record + "\n:00000001FF\n")

        with pytest.raises(ValueError, match="must carry 2 data bytes"):
            IntelHexLoader().load_intel_hex(path)
