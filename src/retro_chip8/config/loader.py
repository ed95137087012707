import yaml
from typing import Dict, Any

from retro_chip8.core.errors import ConfigError
from .models import EmulatorConfig, DisplayConfig

KNOWN_KEYS = {"speed", "frame_rate", "seed", "stack_depth", "key_map", "display"}

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return self.parse_config(data or {})

    def load_from_string(self, text: str) -> EmulatorConfig:
        return self.parse_config(yaml.safe_load(text) or {})

    def parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping.")

        for key in data:
            if key not in KNOWN_KEYS:
                print(f"Warning: Unknown configuration key '{key}' ignored")

        defaults = EmulatorConfig()
        speed = self._parse_positive(data, "speed", defaults.speed)
        frame_rate = self._parse_positive(data, "frame_rate", defaults.frame_rate)
        stack_depth = self._parse_positive(data, "stack_depth", defaults.stack_depth)

        seed = data.get("seed")
        if seed is not None:
            seed = self._parse_int(seed)

        # Parse Key Map
        key_map = defaults.key_map
        if data.get("key_map") is not None:
            raw_map = data["key_map"]
            if not isinstance(raw_map, dict):
                raise ConfigError("key_map must be a mapping of host key -> CHIP-8 key.")
            key_map = {str(host).upper(): self._parse_int(logical) for host, logical in raw_map.items()}

        # Parse Display
        display_data = data.get("display") or {}
        if not isinstance(display_data, dict):
            raise ConfigError("display must be a mapping.")
        display = DisplayConfig(
            scale=self._parse_positive(display_data, "scale", DisplayConfig.scale),
            foreground=str(display_data.get("foreground", DisplayConfig.foreground)),
            background=str(display_data.get("background", DisplayConfig.background)),
        )

        return EmulatorConfig(
            speed=speed,
            frame_rate=frame_rate,
            seed=seed,
            stack_depth=stack_depth,
            key_map=key_map,
            display=display,
        )

    def _parse_positive(self, data: Dict[str, Any], key: str, default: int) -> int:
        value = self._parse_int(data.get(key, default))
        if value <= 0:
            raise ConfigError(f"'{key}' must be a positive integer, got {value}")
        return value

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
