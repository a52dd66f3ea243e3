# retro_chip8/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8の12ビットアドレス空間を、連続した領域を受け持つデバイスの並びとして表現します。
CPUと命令実装はバス経由でのみメモリへアクセスし、どの領域が書き込み禁止かを意識しません。
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

logger = logging.getLogger(__name__)

# @intent:responsibility バスに接続できる記憶デバイスの共通インターフェース。
class Device(ABC):
    """
    バス上の1領域を受け持つデバイス。
    read/writeに渡されるアドレスは領域先頭からのオフセットです。
    """
    @property
    @abstractmethod
    def size(self) -> int:
        pass

    # @intent:pre-condition 0 <= offset < size
    @abstractmethod
    def read(self, offset: int) -> int:
        pass

    # @intent:pre-condition 0 <= offset < size かつ dataは0x00-0xFF
    @abstractmethod
    def write(self, offset: int, data: int) -> None:
        pass

    # @intent:responsibility 初期化用の書き込み。書き込み保護を無視します。
    def load(self, offset: int, data: int) -> None:
        self.write(offset, data)

    @abstractmethod
    def clear(self) -> None:
        pass

# @intent:responsibility バイト単位で読み書きできる記憶領域。
class RAM(Device):
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._cells = bytearray(size)

    @property
    def size(self) -> int:
        return len(self._cells)

    def _check(self, offset: int) -> None:
        if not 0 <= offset < len(self._cells):
            raise IndexError(
                f"Offset {offset} out of bounds for {type(self).__name__} of size {len(self._cells)}."
            )

    def read(self, offset: int) -> int:
        self._check(offset)
        return self._cells[offset]

    def write(self, offset: int, data: int) -> None:
        self._check(offset)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._cells[offset] = data

    def clear(self) -> None:
        self._cells[:] = bytes(len(self._cells))

# @intent:responsibility 実行中の書き込みを受け付けない記憶領域（グリフテーブル用）。
class ROM(RAM):
    """
    プログラムからの書き込みは破棄して警告を記録します。
    リセット時の転送はload()経由で行います。
    """
    def write(self, offset: int, data: int) -> None:
        self._check(offset)
        logger.warning("Ignored write of %#04x to ROM offset %#05x", data, offset)

    def load(self, offset: int, data: int) -> None:
        super().write(offset, data)

# (base, end, device)
Mapping = Tuple[int, int, Device]

# @intent:responsibility アドレスをデバイスとオフセットに解決し、アクセスを委譲します。
class Bus:
    def __init__(self):
        self._mappings: List[Mapping] = []

    # @intent:responsibility デバイスをbaseから size バイトの領域に接続します。
    # @intent:pre-condition 既存の領域と重なってはいけません。
    def attach(self, base: int, device: Device) -> None:
        if not isinstance(device, Device):
            raise TypeError(f"{type(device).__name__} is not a bus Device.")
        if base < 0:
            raise ValueError(f"Base address {base} must be non-negative.")
        end = base + device.size - 1
        for start, stop, other in self._mappings:
            if base <= stop and start <= end:
                raise ValueError(
                    f"Region {base:#06x}-{end:#06x} overlaps {type(other).__name__} at {start:#06x}-{stop:#06x}."
                )
        self._mappings.append((base, end, device))
        self._mappings.sort(key=lambda mapping: mapping[0])

    def _resolve(self, address: int) -> Tuple[Device, int]:
        for start, stop, device in self._mappings:
            if start <= address <= stop:
                return device, address - start
        raise IndexError(f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 連続領域 address..address+length-1 が全てマップ済みであることを確認します。
    # @intent:post-condition 未マップのアドレスがあればIndexErrorを送出します。デバイスには触れません。
    def check_range(self, address: int, length: int) -> None:
        for offset in range(length):
            self._resolve(address + offset)

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        return device.read(offset)

    # @intent:responsibility 実行時の書き込み。ROM領域では破棄されます。
    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)

    # @intent:responsibility フォント転送やプログラム配置のための書き込み。ROM領域にも届きます。
    def load(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.load(offset, data)

    def clear(self) -> None:
        for _, _, device in self._mappings:
            device.clear()

    # @intent:return マップされた最後の領域の終端+1。
    def get_size(self) -> int:
        if not self._mappings:
            return 0
        return max(stop for _, stop, _ in self._mappings) + 1
