import yaml
from typing import Any, Dict

from chip8_tracer.arch.chip8.state import KEY_COUNT
from .models import EmulatorConfig, DisplayConfig, TimingConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        display_data = data.get("display") or {}
        defaults = DisplayConfig()
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", defaults.scale), "display.scale"),
            foreground=str(display_data.get("foreground", defaults.foreground)),
            background=str(display_data.get("background", defaults.background)),
        )

        timing_data = data.get("timing") or {}
        timing_defaults = TimingConfig()
        timing = TimingConfig(
            ticks_per_frame=self._parse_positive(
                timing_data.get("ticks_per_frame", timing_defaults.ticks_per_frame), "timing.ticks_per_frame"),
            timer_hz=self._parse_positive(timing_data.get("timer_hz", timing_defaults.timer_hz), "timing.timer_hz"),
        )

        keymap_data = data.get("keymap")
        if keymap_data is None:
            keymap = dict(DEFAULT_KEYMAP)
        elif not isinstance(keymap_data, dict):
            raise ValueError("keymap must be a mapping of key names to keypad indices")
        else:
            keymap = {}
            for key_name, index in keymap_data.items():
                value = self._parse_int(index)
                if not 0 <= value < KEY_COUNT:
                    raise ValueError(f"Keypad index for '{key_name}' out of range: {index}")
                keymap[str(key_name)] = value

        seed = data.get("seed")
        return EmulatorConfig(
            display=display,
            timing=timing,
            keymap=keymap,
            seed=None if seed is None else self._parse_int(seed),
        )

    def _parse_positive(self, value: Any, name: str) -> int:
        parsed = self._parse_int(value)
        if parsed <= 0:
            raise ValueError(f"{name} must be positive: {value}")
        return parsed

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
