# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
ストレージ上のCHIP-8プログラムイメージ（生バイナリ）を読み込み、マシンへ配置します。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

class ProgramLoader:
    """
    CHIP-8プログラムイメージ（.ch8など）をファイルから読み込むローダー。
    """
    # @intent:responsibility ファイルを読み込み、cpu.load_programへ渡します。
    # @intent:return ロードしたバイト数。
    def load_file(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        path = Path(file_path)
        data = path.read_bytes()
        if not data:
            raise ValueError(f"Program image {path} is empty.")
        cpu.load_program(data)
        logger.info("Loaded program image %s", path)
        return len(data)
