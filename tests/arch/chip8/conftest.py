# tests/arch/chip8/conftest.py
"""
CHIP-8命令テスト用の共通フィクスチャ。
"""
import random

import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import create_memory_bus
from retro_chip8.arch.chip8.quirks import Quirks


def _write_words(bus, address, words):
    for offset, word in enumerate(words):
        bus.load(address + offset * 2, (word >> 8) & 0xFF)
        bus.load(address + offset * 2 + 1, word & 0xFF)


@pytest.fixture
def make_cpu():
    """乱数シードと互換性スイッチを指定してCPUを生成するファクトリ。"""
    def factory(quirks=None, seed=1234):
        return Chip8Cpu(create_memory_bus(), rng=random.Random(seed), quirks=quirks or Quirks())
    return factory


@pytest.fixture
def cpu(make_cpu):
    return make_cpu()


@pytest.fixture
def state(cpu):
    return cpu.get_state()


# @intent:utility_function PCの位置に命令列を配置し、命令数だけstepを実行して最後の結果を返します。
@pytest.fixture
def run():
    def execute(cpu, *words):
        _write_words(cpu.get_bus(), cpu.get_state().pc, words)
        result = None
        for _ in words:
            result = cpu.step()
        return result
    return execute


@pytest.fixture
def write_words():
    return _write_words
