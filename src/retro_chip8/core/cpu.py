# retro_chip8/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ、デコード、実行、PC更新、タイマー更新の順序をここで一度だけ定義し、
アーキテクチャ固有の処理はサブクラスのフックに任せます。
"""
from abc import ABC, abstractmethod
from typing import Dict, List

from retro_chip8.transport.bus import Bus
from retro_chip8.core.operation import Operation, StepResult, StepStatus
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import RegisterLayoutInfo

# @intent:responsibility バスに接続されたCPUの命令サイクルを駆動する基底クラス。
class AbstractCpu(ABC):
    def __init__(self, bus: Bus):
        self._bus = bus
        # 状態は get_state() 経由で公開する
        self._state: CpuState = self._create_initial_state()

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    def reset(self) -> None:
        self._state = self._create_initial_state()

    def get_state(self) -> CpuState:
        return self._state

    def get_bus(self) -> Bus:
        return self._bus

    # @intent:responsibility PCが指す命令ワードを返します。PCは進めません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:post-condition 解釈できない命令ワードでは例外を送出し、状態には触れません。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、その結果を返します。
    # @intent:rationale 分岐命令はこの後の無条件なPC加算を前提にジャンプ先を補正するため、順序は固定です。
    def step(self) -> StepResult:
        opcode = self._fetch()
        operation = self._decode(opcode)
        self._execute(operation)
        self._update_pc(operation)
        tone = self._tick()
        return StepResult(operation=operation, status=self._step_status(), tone=tone)

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc += operation.length

    # @intent:return このステップで発音要求があればTrue。タイマーを持たないCPUは常にFalse。
    def _tick(self) -> bool:
        return False

    def _step_status(self) -> StepStatus:
        return StepStatus.EXECUTED

    # @intent:responsibility ホストがCPUの内部構造を知らずにレジスタを表示するための値の一覧。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタ表示のグループ分け。
        """
        pass
