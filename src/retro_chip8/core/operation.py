# retro_chip8/core/operation.py
"""
デコード済み命令と1ステップの実行結果

このモジュールは、デコードされた命令と、CPUを1ステップ進めた結果を表す
不変のデータ構造を定義します。ホスト（UIなど）への情報提供に用います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令ワード、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: int # 例: 0x6A02
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#02"]
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 1ステップの完了状態を定義します。
class StepStatus(Enum):
    EXECUTED = "EXECUTED"
    WAITING_FOR_KEY = "WAITING_FOR_KEY"   # キー入力待ち命令で停止中。次のstepで再試行される

# @intent:responsibility CPUを1ステップ進めた結果を不変に記録します。
@dataclass(frozen=True)
class StepResult:
    """
    step()の戻り値。実行した命令、完了状態、このステップで発音要求があったかを保持します。
    """
    operation: Operation
    status: StepStatus = StepStatus.EXECUTED
    tone: bool = False # サウンドタイマーが動作中（ホストはビープ音を鳴らす）
