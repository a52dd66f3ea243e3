# tests/core/test_cpu.py
"""
retro_chip8.core.cpuモジュールの単体テスト。
"""
import pytest
from typing import Dict, List

from retro_chip8.core.state import CpuState
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.operation import Operation, StepResult, StepStatus
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo

# @intent:test_suite CPUの状態管理と抽象CPUの基本的な動作を検証します。

class StubCpu(AbstractCpu):
    """
    2バイト命令を読み、0x20番地に0xFFを書き込むだけのテスト用CPU。
    """
    def __init__(self, bus: Bus, initial_pc: int = 0x0000, initial_sp: int = 0x0000):
        self._initial_pc = initial_pc
        self._initial_sp = initial_sp
        super().__init__(bus)

    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=self._initial_pc, sp=self._initial_sp)

    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        if opcode == 0x0000:
            return Operation(opcode=opcode, mnemonic="NOP")
        raise ValueError(f"bad opcode {opcode:04X}")

    def _execute(self, operation: Operation) -> None:
        self._bus.write(0x0020, 0xFF)

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "SP": self._state.sp}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("Test Group", [
                RegisterInfo("PC", 12),
                RegisterInfo("SP", 4)
            ])
        ]

class TestCpuState:
    """
    CpuStateの単体テスト。
    """
    def test_cpu_state_init_default(self):
        state = CpuState()
        assert state.pc == 0x0000
        assert state.sp == 0x0000

    def test_cpu_state_init_with_values(self):
        state = CpuState(pc=0x0234, sp=3)
        assert state.pc == 0x0234
        assert state.sp == 3

    def test_cpu_state_mutability(self):
        state = CpuState()
        state.pc = 0x0300
        assert state.pc == 0x0300

class TestAbstractCpu:
    """
    AbstractCpuの抽象メソッドと具象メソッドのテスト。
    """
    @pytest.fixture
    def setup_cpu(self):
        bus = Bus()
        ram = RAM(256)
        bus.attach(0x0000, ram)
        cpu = StubCpu(bus, initial_pc=0x0010, initial_sp=0x0002)
        return cpu, bus, ram

    def test_abstract_cpu_cannot_instantiate(self):
        with pytest.raises(TypeError):
            AbstractCpu(Bus())

    def test_abstract_cpu_init(self, setup_cpu):
        cpu, bus, _ = setup_cpu
        state = cpu.get_state()
        assert state.pc == 0x0010
        assert state.sp == 0x0002
        assert cpu.get_bus() is bus

    def test_abstract_cpu_reset(self, setup_cpu):
        cpu, _, _ = setup_cpu
        cpu.get_state().pc = 0x00AA
        cpu.reset()
        assert cpu.get_state().pc == 0x0010
        assert cpu.get_state().sp == 0x0002

    # @intent:test_case_step フェッチ→デコード→実行→PC更新の流れとStepResultを検証します。
    def test_abstract_cpu_step(self, setup_cpu):
        cpu, bus, ram = setup_cpu

        result = cpu.step()

        assert cpu.get_state().pc == 0x0012
        assert ram.read(0x20) == 0xFF
        assert isinstance(result, StepResult)
        assert result.operation.mnemonic == "NOP"
        assert result.status is StepStatus.EXECUTED
        assert result.tone is False

    # @intent:test_case_step デコードに失敗した場合、実行もPC更新も行われないことを検証します。
    def test_step_decode_failure_leaves_state(self, setup_cpu):
        cpu, bus, ram = setup_cpu
        bus.write(0x0010, 0x12)

        with pytest.raises(ValueError):
            cpu.step()

        assert cpu.get_state().pc == 0x0010
        assert ram.read(0x20) == 0x00

    def test_ui_api_integration(self, setup_cpu):
        cpu, _, _ = setup_cpu
        reg_map = cpu.get_register_map()
        assert reg_map == {"PC": 0x0010, "SP": 0x0002}

        layout = cpu.get_register_layout()
        assert len(layout) == 1
        assert layout[0].group_name == "Test Group"
        assert [r.name for r in layout[0].registers] == ["PC", "SP"]
