# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
import random
from typing import Dict, List, Optional

from retro_chip8.common.errors import InvalidKeyError, ProgramTooLargeError
from retro_chip8.common.types import RegisterInfo, RegisterLayoutInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.operation import Operation, StepStatus
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.display import Framebuffer
from retro_chip8.arch.chip8.quirks import Quirks
from retro_chip8.arch.chip8.state import (
    Chip8CpuState, FONTSET, FONTSET_START, NUM_KEYS, NUM_REGISTERS, PROGRAM_MAX_SIZE, PROGRAM_START,
)
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    ホストは set_key() でキー状態を設定し、step() を任意の間隔で呼び出し、
    framebuffer / タイマー状態を読み出して描画・発音を行います。
    """
    # @intent:pre-condition busは0x000-0xFFFの4KBがマップされている必要があります（memory.create_memory_bus）。
    # @intent:rationale 乱数源はインスタンス毎に注入可能とし、テストで再現性を確保します。
    def __init__(self, bus: Bus, rng: Optional[random.Random] = None, quirks: Optional[Quirks] = None):
        self._rng = rng if rng is not None else random.Random()
        self._quirks = quirks if quirks is not None else Quirks()
        super().__init__(bus)
        self.reset()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState(quirks=self._quirks, rng=self._rng)

    # @intent:responsibility 全状態を初期化し、メモリを消去してグリフテーブルを転送します。
    def reset(self) -> None:
        super().reset()
        self._bus.clear()
        for offset, byte in enumerate(FONTSET):
            self._bus.load(FONTSET_START + offset, byte)
        logger.info("CHIP-8 reset (pc=%#05x)", self._state.pc)

    # @intent:responsibility プログラムイメージを0x200から配置します。
    # @intent:post-condition プログラム領域に収まらない場合は何も書き込まずにProgramTooLargeErrorを送出します。
    def load_program(self, data: bytes) -> None:
        if len(data) > PROGRAM_MAX_SIZE:
            raise ProgramTooLargeError(
                f"Program of {len(data)} bytes exceeds the {PROGRAM_MAX_SIZE} bytes available at {PROGRAM_START:#05x}."
            )
        for offset, byte in enumerate(data):
            self._bus.load(PROGRAM_START + offset, byte)
        logger.info("Loaded %d byte program at %#05x", len(data), PROGRAM_START)

    # @intent:responsibility PCが指す2バイトをビッグエンディアンで結合します。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        logger.debug("%03X: %s  %s", self._state.pc, operation.opcode_hex, operation)
        execute_instruction(operation, self._state, self._bus)

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします。
    # @intent:return サウンドタイマーが動作していた（発音要求がある）場合True。
    def _tick(self) -> bool:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        tone = state.sound_timer > 0
        if tone:
            state.sound_timer -= 1
        return tone

    def _step_status(self) -> StepStatus:
        if self._state.awaiting_key:
            return StepStatus.WAITING_FOR_KEY
        return StepStatus.EXECUTED

    # --- Host API ---

    # @intent:responsibility ホストからキーパッドの状態を設定します。
    def set_key(self, index: int, pressed: bool) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < NUM_KEYS:
            raise InvalidKeyError(f"Key index {index!r} out of range 0x0-0xF.")
        self._state.keypad[index] = bool(pressed)

    @property
    def framebuffer(self) -> Framebuffer:
        return self._state.display

    def get_pixel(self, index: int) -> int:
        return self._state.display.get(index)

    # @intent:responsibility レンダラ向けのRGB24画面データを返します。
    def display_bytes(self) -> bytes:
        return self._state.display.to_bytes()

    def delay_timer_expired(self) -> bool:
        return self._state.delay_timer == 0

    def sound_timer_expired(self) -> bool:
        return self._state.sound_timer == 0

    @property
    def tone_active(self) -> bool:
        return self._state.sound_timer > 0

    @property
    def awaiting_key(self) -> bool:
        return self._state.awaiting_key

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(NUM_REGISTERS)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]
