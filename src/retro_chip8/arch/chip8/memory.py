# src/retro_chip8/arch/chip8/memory.py
"""
CHIP-8 の4KBアドレス空間を構成します。
"""
from retro_chip8.transport.bus import Bus, RAM, ROM
from retro_chip8.arch.chip8.state import MEMORY_SIZE, FONTSET_START, FONTSET_END

# @intent:responsibility グリフ領域をROM、それ以降をRAMとしてマップしたバスを生成します。
# @intent:rationale プログラムからのFx55/Fx33等でグリフテーブルが上書きされないようにします。
def create_memory_bus() -> Bus:
    bus = Bus()
    bus.attach(FONTSET_START, ROM(FONTSET_END - FONTSET_START))
    bus.attach(FONTSET_END, RAM(MEMORY_SIZE - FONTSET_END))
    return bus
