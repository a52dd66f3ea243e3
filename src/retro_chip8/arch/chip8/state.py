# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
import random
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.display import Framebuffer
from retro_chip8.arch.chip8.quirks import Quirks

# @intent:constant メモリマップと固定サイズ。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
PROGRAM_MAX_SIZE = MEMORY_SIZE - PROGRAM_START
FONTSET_START = 0x000
GLYPH_SIZE = 5

NUM_REGISTERS = 16
STACK_DEPTH = 16
NUM_KEYS = 16
VF = 0xF  # フラグレジスタ

# @intent:constant 16進数字 0-F のグリフ（各5バイト）。リセット時に低位メモリへ転送されます。
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
FONTSET_END = FONTSET_START + len(FONTSET)

# @intent:responsibility 戻りアドレスを保持する固定長スタック。
# @intent:post-condition オーバーフロー/アンダーフロー時は内容を変更せずに例外を送出します。
class CallStack:
    def __init__(self, depth: int = STACK_DEPTH):
        self._slots: List[int] = [0] * depth
        self._pointer = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def push(self, address: int) -> None:
        if self._pointer >= len(self._slots):
            raise StackOverflowError(
                f"Call stack overflow: more than {len(self._slots)} nested calls (return to {address:#05x})"
            )
        self._slots[self._pointer] = address
        self._pointer += 1

    def pop(self) -> int:
        if self._pointer == 0:
            raise StackUnderflowError("Return with an empty call stack.")
        self._pointer -= 1
        return self._slots[self._pointer]

    def peek(self) -> int:
        if self._pointer == 0:
            raise StackUnderflowError("Call stack is empty.")
        return self._slots[self._pointer - 1]

    def entries(self) -> List[int]:
        """現在積まれているアドレス（底から順）。"""
        return self._slots[:self._pointer]

    def clear(self) -> None:
        self._slots = [0] * len(self._slots)
        self._pointer = 0

    def __len__(self) -> int:
        return self._pointer

    def __eq__(self, other) -> bool:
        if not isinstance(other, CallStack):
            return NotImplemented
        return self.entries() == other.entries() and self.capacity == other.capacity

    def __repr__(self) -> str:
        return f"CallStack({[f'{a:#05x}' for a in self.entries()]})"

# @intent:responsibility CHIP-8 CPUの全てのレジスタ、タイマー、スタック、キーパッド、画面の状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    spは常にstackの深さと一致します。
    """
    pc: int = PROGRAM_START
    v: bytearray = field(default_factory=lambda: bytearray(NUM_REGISTERS))  # V0-VF
    i: int = 0x000        # Address Register
    delay_timer: int = 0
    sound_timer: int = 0
    stack: CallStack = field(default_factory=CallStack)
    keypad: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    display: Framebuffer = field(default_factory=Framebuffer, compare=False)
    awaiting_key: bool = False  # Fx0A でキー入力待ち中

    # @intent:rationale 乱数源と互換性スイッチはマシン毎に保持し、プロセス全体の状態に依存しない。
    quirks: Quirks = field(default_factory=Quirks, compare=False, repr=False)
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)

    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value
