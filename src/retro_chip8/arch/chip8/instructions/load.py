# src/retro_chip8/arch/chip8/instructions/load.py
"""
転送命令（アドレスレジスタ、タイマー、キー入力、メモリブロック）の実装。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState, FONTSET_START, GLYPH_SIZE
from .fields import x, nnn
from .base import reg, addr, INSTRUCTION_LENGTH

# --- LD I, addr (Annn) ---
def decode_ld_i(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["I", addr(nnn(opcode))])

def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = nnn(op.opcode)
    if state.quirks.index_load_skips:
        state.pc += INSTRUCTION_LENGTH

# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(opcode: int) -> Operation:
    return Operation(opcode, "LD", [reg(x(opcode)), "DT"])

def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[x(op.opcode)] = state.delay_timer

# --- LD Vx, K (Fx0A) ---
def decode_ld_vx_k(opcode: int) -> Operation:
    return Operation(opcode, "LD", [reg(x(opcode)), "K"])

# @intent:responsibility 押下中のキー（最小番号）をVxへ格納します。
# @intent:post-condition キーが押されていなければPCを巻き戻して待機状態とし、次のstepで同じ命令を再実行します。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    pressed = [key for key, down in enumerate(state.keypad) if down]
    if pressed:
        state.v[x(op.opcode)] = pressed[0]
        state.awaiting_key = False
    else:
        state.awaiting_key = True
        state.pc -= INSTRUCTION_LENGTH

# --- LD DT, Vx (Fx15) ---
def decode_ld_dt_vx(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["DT", reg(x(opcode))])

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[x(op.opcode)]

# --- LD ST, Vx (Fx18) ---
def decode_ld_st_vx(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["ST", reg(x(opcode))])

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[x(op.opcode)]

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(opcode: int) -> Operation:
    return Operation(opcode, "ADD", ["I", reg(x(opcode))])

# @intent:rationale メモリサイズに対する範囲チェックは行わず、範囲外アクセスはバスが検出します。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i += state.v[x(op.opcode)]

# --- LD F, Vx (Fx29) ---
def decode_ld_f(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["F", reg(x(opcode))])

# @intent:responsibility Vxの下位4ビットが示す16進数字グリフのアドレスをIへ設定します。
def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    digit = state.v[x(op.opcode)] & 0xF
    state.i = FONTSET_START + digit * GLYPH_SIZE

# --- LD B, Vx (Fx33) ---
def decode_ld_b(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["B", reg(x(opcode))])

# @intent:responsibility Vxの10進表現（百、十、一の位）をI, I+1, I+2へ格納します。
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    value = state.v[x(op.opcode)]
    bus.check_range(state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_store(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["[I]", reg(x(opcode))])

# @intent:post-condition 範囲外を含む場合は何も書き込まずにIndexErrorを送出します。
def execute_store(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    bus.check_range(state.i, x(op.opcode) + 1)
    for index in range(x(op.opcode) + 1):
        bus.write(state.i + index, state.v[index])

# --- LD Vx, [I] (Fx65) ---
def decode_read(opcode: int) -> Operation:
    return Operation(opcode, "LD", [reg(x(opcode)), "[I]"])

def execute_read(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    bus.check_range(state.i, x(op.opcode) + 1)
    for index in range(x(op.opcode) + 1):
        state.v[index] = bus.read(state.i + index)
