import pytest

from retro_chip8.core.errors import ConfigError
from retro_chip8.peripherals.keypad import Keypad, KeyMap, DEFAULT_KEY_MAP

class TestKeypad:
    def test_press_release(self):
        keypad = Keypad()
        assert not keypad.is_pressed(0xF)
        keypad.press(0xF)
        assert keypad.is_pressed(0xF)
        keypad.release(0xF)
        assert not keypad.is_pressed(0xF)

    def test_invalid_key(self):
        keypad = Keypad()
        with pytest.raises(ValueError):
            keypad.press(0x10)
        with pytest.raises(ValueError):
            keypad.is_pressed(-1)

    def test_one_shot_subscription(self):
        keypad = Keypad()
        received = []
        keypad.subscribe_next_press(received.append)
        assert keypad.has_pending_subscription

        keypad.press(0x3)
        keypad.press(0x4)
        assert received == [0x3]
        assert not keypad.has_pending_subscription

    def test_release_does_not_fire_subscription(self):
        keypad = Keypad()
        received = []
        keypad.subscribe_next_press(received.append)
        keypad.release(0x3)
        assert received == []

    def test_reset(self):
        keypad = Keypad()
        keypad.press(0x1)
        keypad.subscribe_next_press(lambda key: None)
        keypad.reset()
        assert not keypad.is_pressed(0x1)
        assert not keypad.has_pending_subscription

class TestKeyMap:
    def test_default_layout(self):
        key_map = KeyMap()
        assert key_map.to_logical("1") == 0x1
        assert key_map.to_logical("4") == 0xC
        assert key_map.to_logical("x") == 0x0
        assert key_map.to_logical("V") == 0xF
        assert key_map.to_host(0xD) == "R"
        assert key_map.to_logical("P") is None

    def test_default_is_bijection(self):
        assert sorted(DEFAULT_KEY_MAP.values()) == list(range(16))
        assert len(KeyMap().as_dict()) == 16

    def test_rejects_missing_key(self):
        mapping = dict(DEFAULT_KEY_MAP)
        del mapping["V"]
        with pytest.raises(ConfigError):
            KeyMap(mapping)

    def test_rejects_duplicate_logical_key(self):
        mapping = dict(DEFAULT_KEY_MAP)
        mapping["V"] = 0x0
        with pytest.raises(ConfigError):
            KeyMap(mapping)

    def test_rejects_case_duplicate_host_key(self):
        mapping = dict(DEFAULT_KEY_MAP)
        del mapping["V"]
        mapping["z"] = 0xF
        with pytest.raises(ConfigError):
            KeyMap(mapping)

    def test_rejects_out_of_range(self):
        mapping = dict(DEFAULT_KEY_MAP)
        mapping["V"] = 0x10
        with pytest.raises(ConfigError):
            KeyMap(mapping)
