# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest
from retro_chip8.transport.bus import Bus, Device, RAM, ROM

# @intent:test_suite メモリバスとデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    """
    RAMデバイスの単体テスト。
    """
    # @intent:test_case_init RAMクラスが正しいサイズで初期化されることを検証します。
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.size == 16
        assert all(ram.read(a) == 0 for a in range(16))

    # @intent:test_case_init 無効なサイズでRAMを初期化するとValueErrorが発生することを検証します。
    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    # @intent:test_case_rw 境界内でRAMへの読み書きが正しく行われることを検証します。
    def test_ram_read_write_within_bounds(self):
        ram = RAM(4)
        for offset, value in enumerate((0x12, 0x34, 0x56, 0x78)):
            ram.write(offset, value)
        assert [ram.read(a) for a in range(4)] == [0x12, 0x34, 0x56, 0x78]

    # @intent:test_case_rw_error 境界外アクセスでIndexErrorが発生することを検証します。
    def test_ram_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(IndexError, match="Offset 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(IndexError):
            ram.write(-1, 0x00)

    # @intent:test_case_rw_error 8bitを超える値の書き込みでValueErrorが発生することを検証します。
    def test_ram_write_invalid_data(self):
        ram = RAM(4)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

    def test_ram_load_behaves_like_write(self):
        ram = RAM(4)
        ram.load(1, 0x7E)
        assert ram.read(1) == 0x7E

    # @intent:test_case_clear clearで全バイトが0に戻ることを検証します。
    def test_ram_clear(self):
        ram = RAM(4)
        ram.write(2, 0xAA)
        ram.clear()
        assert ram.read(2) == 0


class TestBus:
    """
    Busクラスの単体テスト。
    """
    # @intent:test_case_dispatch 接続されたデバイスへアドレスがオフセット変換されて届くことを検証します。
    def test_read_write_dispatch(self):
        bus = Bus()
        low, high = RAM(0x100), RAM(0x100)
        bus.attach(0x0100, high)
        bus.attach(0x0000, low)

        bus.write(0x0105, 0x99)
        assert high.read(0x05) == 0x99
        assert low.read(0x05) == 0x00
        assert bus.read(0x0105) == 0x99

    # @intent:test_case_unmapped 未マップのアドレスへのアクセスでIndexErrorが発生することを検証します。
    def test_unmapped_address(self):
        bus = Bus()
        bus.attach(0x0000, RAM(0x100))
        with pytest.raises(IndexError, match="not mapped to any device"):
            bus.read(0x0100)

    # @intent:test_case_clear Bus.clearで全デバイスが0クリアされることを検証します。
    def test_clear_all_devices(self):
        bus = Bus()
        bus.attach(0x0000, ROM(0x10))
        bus.attach(0x0010, RAM(0x10))
        bus.load(0x0001, 0x11)
        bus.write(0x0011, 0x22)

        bus.clear()
        assert bus.read(0x0001) == 0
        assert bus.read(0x0011) == 0

    # @intent:test_case_size マップされた空間の終端+1がサイズとして返ることを検証します。
    def test_get_size(self):
        bus = Bus()
        assert bus.get_size() == 0
        bus.attach(0x0000, ROM(0x50))
        bus.attach(0x0050, RAM(0x1000 - 0x50))
        assert bus.get_size() == 0x1000

    # @intent:test_case_device 独自のDevice実装もバスに接続できることを検証します。
    def test_custom_device(self):
        class ConstantDevice(Device):
            size = 4

            def read(self, offset):
                return 0x5A

            def write(self, offset, data):
                pass

            def clear(self):
                pass

        bus = Bus()
        bus.attach(0x0000, ConstantDevice())
        assert bus.read(0x0002) == 0x5A
        with pytest.raises(IndexError):
            bus.read(0x0004)
