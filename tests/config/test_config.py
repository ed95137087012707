import pytest

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.core.errors import ConfigError, StackOverflowError
from retro_chip8.peripherals.keypad import DEFAULT_KEY_MAP

def test_defaults_from_empty_document():
    config = ConfigLoader().load_from_string("")
    assert config == EmulatorConfig()
    assert config.speed == 10
    assert config.frame_rate == 60
    assert config.seed is None
    assert config.stack_depth == 16
    assert config.key_map == DEFAULT_KEY_MAP

def test_load_from_file(tmp_path):
    path = tmp_path / "chip8.yaml"
    path.write_text(
        "speed: 20\n"
        "frame_rate: 30\n"
        "seed: '0x2A'\n"
        "stack_depth: 12\n"
        "display:\n"
        "  scale: 8\n"
        "  foreground: '#00FF00'\n",
        encoding="utf-8",
    )
    config = ConfigLoader().load_from_file(str(path))
    assert config.speed == 20
    assert config.frame_rate == 30
    assert config.seed == 42
    assert config.stack_depth == 12
    assert config.display.scale == 8
    assert config.display.foreground == "#00FF00"
    assert config.display.background == "#101010"

def test_custom_key_map():
    text = "key_map:\n" + "".join(f"  k{i:X}: {i}\n" for i in range(16))
    config = ConfigLoader().load_from_string(text)
    assert config.key_map["K0"] == 0
    assert config.key_map["KF"] == 15

    interpreter = SystemBuilder().build_system(config)
    assert interpreter.key_map.to_logical("ka") == 0xA

def test_unknown_key_warns(capsys):
    config = ConfigLoader().load_from_string("speed: 5\nturbo: true\n")
    assert config.speed == 5
    assert "Unknown configuration key 'turbo'" in capsys.readouterr().out

@pytest.mark.parametrize("text", [
    "speed: 0",
    "speed: -3",
    "speed: fast",
    "speed: true",
    "frame_rate: 0",
    "stack_depth: '0x0'",
    "seed: abc",
    "key_map: [1, 2]",
    "display: 3",
    "display:\n  scale: 0",
    "- speed",
])
def test_invalid_values(text):
    with pytest.raises(ConfigError):
        ConfigLoader().load_from_string(text)

def test_incomplete_key_map_rejected_by_builder():
    config = ConfigLoader().load_from_string("key_map:\n  A: 0\n")
    with pytest.raises(ConfigError):
        SystemBuilder().build_system(config)

def test_builder_applies_stack_depth():
    interpreter = SystemBuilder().build_system(EmulatorConfig(stack_depth=2))
    # CALL 0x200 を繰り返し、3段目で溢れる
    interpreter.init(bytes([0x22, 0x00]))
    with pytest.raises(StackOverflowError) as excinfo:
        interpreter.drive()
    assert excinfo.value.depth == 2
    assert interpreter.cpu.instruction_count == 2

def test_builder_applies_speed():
    interpreter = SystemBuilder().build_system(EmulatorConfig(speed=3))
    interpreter.init(bytes([0x12, 0x00]))
    assert len(interpreter.drive()) == 3
