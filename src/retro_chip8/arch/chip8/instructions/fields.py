# src/retro_chip8/arch/chip8/instructions/fields.py
"""
命令ワードのフィールド抽出。

    F X Y N
    |   |___|  kk  (bits 0-7)
    | |_____|  nnn (bits 0-11)
    |_ family  (bits 12-15)
"""

def family(opcode: int) -> int:
    return (opcode & 0xF000) >> 12

def x(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8

def y(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4

def n(opcode: int) -> int:
    return opcode & 0x000F

def kk(opcode: int) -> int:
    return opcode & 0x00FF

def nnn(opcode: int) -> int:
    return opcode & 0x0FFF
