import logging
import yaml
from typing import Dict, Any, Tuple
from .models import SystemConfig, QuirkConfig, TimingConfig, DisplayConfig, DEFAULT_KEYMAP

logger = logging.getLogger(__name__)

KNOWN_KEYS = {"program", "seed", "quirks", "timing", "display", "keymap"}

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        logger.info("Loaded system config %s", path)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")
        for key in data:
            if key not in KNOWN_KEYS:
                logger.warning("Ignoring unknown config key '%s'", key)

        quirks_data = data.get("quirks", {}) or {}
        quirks = QuirkConfig(
            shift_flag_raw=bool(quirks_data.get("shift_flag_raw", False)),
            index_load_skips=bool(quirks_data.get("index_load_skips", False)),
        )

        timing_data = data.get("timing", {}) or {}
        timing = TimingConfig(
            steps_per_frame=self._parse_positive(timing_data.get("steps_per_frame", 10), "steps_per_frame"),
            frame_interval_ms=self._parse_positive(timing_data.get("frame_interval_ms", 16), "frame_interval_ms"),
        )

        display_data = data.get("display", {}) or {}
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", 10), "scale"),
            on_color=self._parse_color(display_data.get("on_color", "#FFFFFF")),
            off_color=self._parse_color(display_data.get("off_color", "#000000")),
        )

        # Parse Key Map (host key name -> keypad index)
        keymap = dict(DEFAULT_KEYMAP)
        if "keymap" in data:
            keymap = {}
            for name, value in (data.get("keymap") or {}).items():
                index = self._parse_int(value)
                if not 0 <= index <= 0xF:
                    raise ValueError(f"Keypad index out of range for key '{name}': {value}")
                keymap[str(name).upper()] = index

        seed = data.get("seed")
        program = data.get("program")

        return SystemConfig(
            program=str(program) if program is not None else None,
            seed=self._parse_int(seed) if seed is not None else None,
            quirks=quirks,
            timing=timing,
            display=display,
            keymap=keymap,
        )

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

    def _parse_positive(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ValueError(f"'{name}' must be positive, got {value}")
        return result

    # 色は "#RRGGBB" または [r, g, b]
    def _parse_color(self, value: Any) -> Tuple[int, int, int]:
        if isinstance(value, str) and value.startswith("#") and len(value) == 7:
            return (int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16))
        if isinstance(value, (list, tuple)) and len(value) == 3:
            channels = tuple(self._parse_int(c) for c in value)
            if all(0 <= c <= 0xFF for c in channels):
                return channels
        raise ValueError(f"Invalid color format: {value}")
