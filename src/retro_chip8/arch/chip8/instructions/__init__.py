# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.operation import Operation
from retro_chip8.common.errors import UnknownOpcodeError
from retro_chip8.arch.chip8.state import Chip8CpuState
from .maps import DECODE_MAP, EXECUTE_MAP, dispatch_key

# @intent:responsibility CHIP-8の命令ワードをデコードします。
# @intent:post-condition 一致する命令がなければUnknownOpcodeErrorを送出します。
def decode_opcode(opcode: int, pc: Optional[int] = None) -> Operation:
    """
    命令ワードをデコードし、Operationオブジェクトを返します。
    """
    decoder = DECODE_MAP.get(dispatch_key(opcode))
    if decoder is None:
        raise UnknownOpcodeError(opcode, pc)
    return decoder(opcode)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(dispatch_key(operation.opcode))
    if executor is None:
        raise UnknownOpcodeError(operation.opcode, state.pc)
    executor(state, bus, operation)
