import logging
import random
from pathlib import Path
from typing import Optional, Tuple, Union

from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import create_memory_bus
from retro_chip8.arch.chip8.quirks import Quirks
from retro_chip8.loader.loader import ProgramLoader
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、Bus、CPUを生成・接続し、プログラムをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig, base_dir: Optional[Union[str, Path]] = None) -> Tuple[Chip8Cpu, Bus]:
        bus = create_memory_bus()

        rng = random.Random(config.seed) if config.seed is not None else random.Random()
        quirks = Quirks(
            shift_flag_raw=config.quirks.shift_flag_raw,
            index_load_skips=config.quirks.index_load_skips,
        )
        cpu = Chip8Cpu(bus, rng=rng, quirks=quirks)

        if config.program:
            self.apply_program(cpu, config.program, base_dir)

        return cpu, bus

    # @intent:responsibility Configで指定されたプログラムをロードします。相対パスはbase_dir（設定ファイルの場所）基準です。
    def apply_program(self, cpu: Chip8Cpu, program: str, base_dir: Optional[Union[str, Path]] = None) -> int:
        path = Path(program)
        if not path.is_absolute() and base_dir is not None:
            path = Path(base_dir) / path
        logger.info("Loading program %s from config", path)
        return ProgramLoader().load_file(path, cpu)
