# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFへのフラグ書き込みは結果の書き込みより先に行います。
そのため x == F の場合は演算結果がフラグを上書きします。
シフト命令(8xy6/8xyE)はフラグを書いた後のVxをその場でシフトするため、
x == F では書き込んだフラグ自体がシフトされます（8F06 は常に VF=0）。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .fields import x, y, kk
from .base import reg, imm

# --- LD Vx, byte (6xkk) ---
def decode_ld_byte(opcode: int) -> Operation:
    return Operation(opcode, "LD", [reg(x(opcode)), imm(kk(opcode))])

def execute_ld_byte(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] = kk(op.opcode)

# --- ADD Vx, byte (7xkk) ---
def decode_add_byte(opcode: int) -> Operation:
    return Operation(opcode, "ADD", [reg(x(opcode)), imm(kk(opcode))])

# @intent:responsibility 8ビットで折り返す加算。VFは変更しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx = x(op.opcode)
    state.v[vx] = (state.v[vx] + kk(op.opcode)) & 0xFF

# --- 8xy0 - 8xy3 ---
def _decode_reg_reg(mnemonic: str):
    def decode(opcode: int) -> Operation:
        return Operation(opcode, mnemonic, [reg(x(opcode)), reg(y(opcode))])
    return decode

decode_ld_reg = _decode_reg_reg("LD")
decode_or = _decode_reg_reg("OR")
decode_and = _decode_reg_reg("AND")
decode_xor = _decode_reg_reg("XOR")
decode_add = _decode_reg_reg("ADD")
decode_sub = _decode_reg_reg("SUB")
decode_subn = _decode_reg_reg("SUBN")

def decode_shr(opcode: int) -> Operation:
    return Operation(opcode, "SHR", [reg(x(opcode))])

def decode_shl(opcode: int) -> Operation:
    return Operation(opcode, "SHL", [reg(x(opcode))])

def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] = state.v[y(op.opcode)]

def execute_or(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] |= state.v[y(op.opcode)]

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] &= state.v[y(op.opcode)]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] ^= state.v[y(op.opcode)]

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility VF = キャリー、結果は下位8ビットのみ保持します。
def execute_add(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx, vy = x(op.opcode), y(op.opcode)
    result = state.v[vx] + state.v[vy]
    state.vf = 1 if result > 0xFF else 0
    state.v[vx] = result & 0xFF

# --- SUB Vx, Vy (8xy5) ---
# @intent:responsibility Vx > Vy ならVF=1で差を格納、それ以外はVF=0で結果を0とします。
# @intent:rationale 借りが発生した場合は2の補数で折り返さず0に飽和させます。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx, vy = x(op.opcode), y(op.opcode)
    a, b = state.v[vx], state.v[vy]
    if a > b:
        state.vf = 1
        state.v[vx] = a - b
    else:
        state.vf = 0
        state.v[vx] = 0

# --- SHR Vx (8xy6) ---
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx = x(op.opcode)
    state.vf = state.v[vx] & 0x01
    state.v[vx] >>= 1

# --- SUBN Vx, Vy (8xy7) ---
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx, vy = x(op.opcode), y(op.opcode)
    a, b = state.v[vx], state.v[vy]
    if b > a:
        state.vf = 1
        state.v[vx] = b - a
    else:
        state.vf = 0
        state.v[vx] = 0

# --- SHL Vx (8xyE) ---
# @intent:responsibility 押し出された最上位ビットをVFへ。通常は0/1に正規化します。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    vx = x(op.opcode)
    msb = state.v[vx] & 0x80
    state.vf = msb if state.quirks.shift_flag_raw else msb >> 7
    state.v[vx] = (state.v[vx] << 1) & 0xFF

# --- RND Vx, byte (Cxkk) ---
def decode_rnd(opcode: int) -> Operation:
    return Operation(opcode, "RND", [reg(x(opcode)), imm(kk(opcode))])

# @intent:responsibility マシンが保持する乱数源から1バイトを取り、kkとのANDをVxへ格納します。
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] = state.rng.randrange(0x100) & kk(op.opcode)
