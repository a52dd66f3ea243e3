# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .fields import x, y, kk, nnn
from .base import reg, imm, addr, skip_if, jump_to

# --- RET (00EE) ---
def decode_ret(opcode: int) -> Operation:
    return Operation(opcode, "RET")

# @intent:responsibility スタックからCALL命令のアドレスを取り出してPCに設定します。
# @intent:rationale 保存されているのはCALL自身のアドレスなので、サイクル側の+2で直後の命令に戻ります。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = state.stack.pop()
    state.sp = len(state.stack)

# --- JP (1nnn) ---
def decode_jp(opcode: int) -> Operation:
    return Operation(opcode, "JP", [addr(nnn(opcode))])

def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    jump_to(state, nnn(op.opcode))

# --- CALL (2nnn) ---
def decode_call(opcode: int) -> Operation:
    return Operation(opcode, "CALL", [addr(nnn(opcode))])

# @intent:responsibility 現在のPCをスタックへ積み、nnnへジャンプします。
# @intent:post-condition スタックが満杯の場合はStackOverflowErrorとなり、PCは変化しません。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.stack.push(state.pc)
    state.sp = len(state.stack)
    jump_to(state, nnn(op.opcode))

# --- SE Vx, byte (3xkk) ---
def decode_se_byte(opcode: int) -> Operation:
    return Operation(opcode, "SE", [reg(x(opcode)), imm(kk(opcode))])

def execute_se_byte(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, state.v[x(op.opcode)] == kk(op.opcode))

# --- SNE Vx, byte (4xkk) ---
def decode_sne_byte(opcode: int) -> Operation:
    return Operation(opcode, "SNE", [reg(x(opcode)), imm(kk(opcode))])

def execute_sne_byte(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, state.v[x(op.opcode)] != kk(op.opcode))

# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(opcode: int) -> Operation:
    return Operation(opcode, "SE", [reg(x(opcode)), reg(y(opcode))])

def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, state.v[x(op.opcode)] == state.v[y(op.opcode)])

# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(opcode: int) -> Operation:
    return Operation(opcode, "SNE", [reg(x(opcode)), reg(y(opcode))])

def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, state.v[x(op.opcode)] != state.v[y(op.opcode)])

# --- JP V0, addr (Bnnn) ---
def decode_jp_v0(opcode: int) -> Operation:
    return Operation(opcode, "JP", ["V0", addr(nnn(opcode))])

# @intent:responsibility nnn + V0 へジャンプします。12ビットへの切り詰めは行いません。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    jump_to(state, nnn(op.opcode) + state.v[0])

# --- SKP Vx (Ex9E) ---
def decode_skp(opcode: int) -> Operation:
    return Operation(opcode, "SKP", [reg(x(opcode))])

def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    key = state.v[x(op.opcode)] & 0xF
    skip_if(state, state.keypad[key])

# --- SKNP Vx (ExA1) ---
def decode_sknp(opcode: int) -> Operation:
    return Operation(opcode, "SKNP", [reg(x(opcode))])

def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    key = state.v[x(op.opcode)] & 0xF
    skip_if(state, not state.keypad[key])
