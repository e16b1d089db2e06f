from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:constant 標準的な 1234/QWER/ASDF/ZXCV 配置（Qtのキー名 -> キーパッド番号）。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class TimingConfig:
    ticks_per_frame: int = 10 # 1フレーム(timer_hz)あたりの実行命令数
    timer_hz: int = 60

@dataclass
class EmulatorConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    seed: Optional[int] = None
