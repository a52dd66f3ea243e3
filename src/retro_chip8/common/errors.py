"""
例外クラスの定義。

エミュレーションコアが呼び出し元へ通知する障害を分類します。
いずれもプロセスを終了させず、検出した操作から同期的に送出されます。
"""
from typing import Optional


# @intent:responsibility マシン実行中の障害の基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility どの命令パターンにも一致しないオペコードを通知します。
# @intent:post-condition デコード段階で送出されるため、CPUの状態は変更されていません。
class UnknownOpcodeError(Chip8Error):
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Unknown opcode {opcode:#06x}{where}")


class StackOverflowError(Chip8Error):
    pass


class StackUnderflowError(Chip8Error):
    pass


# @intent:responsibility プログラムイメージがプログラム領域に収まらないことを通知します。
class ProgramTooLargeError(Chip8Error, ValueError):
    pass


# @intent:responsibility ピクセル状態として0/1以外が指定されたことを通知します。
class InvalidPixelStateError(Chip8Error, ValueError):
    pass


class InvalidKeyError(Chip8Error, ValueError):
    pass


# @intent:responsibility フレームバッファの内部表現の不整合（プログラミングエラー）を通知します。
# @intent:rationale 正しい呼び出し元からは発生しないため、AssertionErrorとして扱います。
class FramebufferCorruptionError(Chip8Error, AssertionError):
    pass
