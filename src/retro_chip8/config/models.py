from dataclasses import dataclass, field
from typing import Optional, Tuple

from retro_chip8.common.types import KeyMap

# @intent:data_structure 一般的なキーボード配置(1234/QWER/ASDF/ZXCV)からCHIP-8の16キーへの対応。
DEFAULT_KEYMAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class QuirkConfig:
    shift_flag_raw: bool = False
    index_load_skips: bool = False

@dataclass
class TimingConfig:
    steps_per_frame: int = 10
    frame_interval_ms: int = 16

@dataclass
class DisplayConfig:
    scale: int = 10
    on_color: Tuple[int, int, int] = (0xFF, 0xFF, 0xFF)
    off_color: Tuple[int, int, int] = (0x00, 0x00, 0x00)

@dataclass
class SystemConfig:
    program: Optional[str] = None
    seed: Optional[int] = None
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
