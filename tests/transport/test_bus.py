# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest

from retro_chip8.transport.bus import Bus, RAM, BusAccessType, ADDRESS_SPACE_SIZE

# @intent:test_suite RAMとバスのアドレス解決・境界チェック・アクセスログを検証します。

@pytest.fixture
def bus_and_ram():
    bus = Bus()
    ram = RAM(ADDRESS_SPACE_SIZE)
    bus.register_device(0x000, 0xFFF, ram)
    return bus, ram

class TestRAM:
    def test_read_write(self):
        ram = RAM(16)
        ram.write(3, 0xAB)
        assert ram.read(3) == 0xAB

    def test_out_of_bounds(self):
        ram = RAM(16)
        with pytest.raises(IndexError):
            ram.read(16)
        with pytest.raises(IndexError):
            ram.write(-1, 0)

    def test_write_rejects_non_byte(self):
        ram = RAM(16)
        with pytest.raises(ValueError):
            ram.write(0, 0x100)
        with pytest.raises(ValueError):
            ram.write(0, -1)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            RAM(0)

    def test_load_block_is_atomic(self):
        ram = RAM(8)
        with pytest.raises(IndexError):
            ram.load_block(4, b"\x01\x02\x03\x04\x05")
        assert all(ram.read(i) == 0 for i in range(8))

    def test_clear(self):
        ram = RAM(4)
        ram.load_block(0, b"\xFF\xFF\xFF\xFF")
        ram.clear()
        assert [ram.read(i) for i in range(4)] == [0, 0, 0, 0]

class TestBus:
    def test_addresses_wrap_to_12_bits(self, bus_and_ram):
        bus, ram = bus_and_ram
        bus.write(0x1005, 0x42)
        assert ram.read(0x005) == 0x42
        assert bus.read(0xF005) == 0x42

    def test_activity_log(self, bus_and_ram):
        bus, _ = bus_and_ram
        bus.write(0x300, 0x12)
        bus.read(0x300)
        bus.peek(0x300)
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x300, 0x12, BusAccessType.WRITE),
            (0x300, 0x12, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    def test_load_does_not_log(self, bus_and_ram):
        bus, ram = bus_and_ram
        bus.load(0x200, b"\x00\xE0")
        assert ram.read(0x200) == 0x00
        assert ram.read(0x201) == 0xE0
        assert bus.get_and_clear_activity_log() == []

    def test_unmapped_address(self):
        bus = Bus()
        bus.register_device(0x000, 0x0FF, RAM(0x100))
        with pytest.raises(IndexError):
            bus.read(0x200)

    def test_register_device_invalid_range(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x200, 0x100, RAM(0x100))
        with pytest.raises(ValueError):
            bus.register_device(0x000, 0x1000, RAM(0x1001))

    def test_register_device_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x000, 0x0FF, RAM(0x200))

    def test_register_non_device(self):
        bus = Bus()
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())
