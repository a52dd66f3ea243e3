# tests/core/test_operation.py
"""
retro_chip8.core.operationモジュールの単体テスト。
"""
import dataclasses

import pytest
from retro_chip8.core.operation import Operation, StepResult, StepStatus

# @intent:test_suite デコード済み命令とステップ結果の不変データ構造の検証。

class TestOperation:
    # @intent:test_case_init Operationが正しく初期化されることを検証します。
    def test_operation_init(self):
        op = Operation(opcode=0x6A02, mnemonic="LD", operands=["VA", "#02"])
        assert op.opcode == 0x6A02
        assert op.opcode_hex == "6A02"
        assert op.length == 2
        assert str(op) == "LD VA, #02"

    def test_operation_without_operands(self):
        op = Operation(opcode=0x00E0, mnemonic="CLS")
        assert op.operands == []
        assert op.opcode_hex == "00E0"
        assert str(op) == "CLS"

    # @intent:test_case_immutability Operationが不変であることを検証します。
    def test_operation_immutability(self):
        op = Operation(opcode=0x00E0, mnemonic="CLS")
        with pytest.raises(dataclasses.FrozenInstanceError):
            op.mnemonic = "RET"

class TestStepResult:
    def test_step_result_defaults(self):
        result = StepResult(operation=Operation(opcode=0x00E0, mnemonic="CLS"))
        assert result.status is StepStatus.EXECUTED
        assert result.tone is False

    def test_step_result_immutability(self):
        result = StepResult(operation=Operation(opcode=0x00E0, mnemonic="CLS"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.tone = True

    def test_step_status_members(self):
        assert StepStatus.EXECUTED.value == "EXECUTED"
        assert StepStatus.WAITING_FOR_KEY.value == "WAITING_FOR_KEY"
