# src/retro_chip8/arch/chip8/display.py
"""
CHIP-8 フレームバッファ。

64x32のモノクロ画面を、1ピクセルあたり3バイト（RGB24、各0または255）で保持します。
レンダラがそのまま転送できる形式のまま、論理的には0/1のピクセルとして操作します。
"""
from typing import List

from retro_chip8.common.errors import FramebufferCorruptionError, InvalidPixelStateError

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
BYTES_PER_PIXEL = 3  # RGB24
DISPLAY_SIZE = DISPLAY_WIDTH * DISPLAY_HEIGHT * BYTES_PER_PIXEL

PIXEL_OFF = 0x00
PIXEL_ON = 0xFF

# @intent:responsibility ピクセル単位のget/set/xor操作を、パックされたRGB24バッファ上で提供します。
# @intent:invariant 1ピクセルを構成する3バイトは常に等しく、0x00か0xFFのいずれかです。
class Framebuffer:
    """
    CHIP-8の画面を表すフレームバッファ。
    インデックスは y * width + x で平坦化したピクセル番号です。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self._width = width
        self._height = height
        self._buffer = bytearray(width * height * BYTES_PER_PIXEL)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """ピクセル数。"""
        return self._width * self._height

    def _offset(self, index: int) -> int:
        if not 0 <= index < self.size:
            raise IndexError(f"Pixel index {index} out of range for {self._width}x{self._height} display.")
        return index * BYTES_PER_PIXEL

    # @intent:responsibility 座標(x, y)をピクセル番号に変換します。
    def index_of(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of range for {self._width}x{self._height} display.")
        return y * self._width + x

    # @intent:responsibility ピクセルの状態(0/1)を返します。
    # @intent:post-condition 内部表現が不正な場合はFramebufferCorruptionErrorを送出します。
    def get(self, index: int) -> int:
        offset = self._offset(index)
        channels = self._buffer[offset:offset + BYTES_PER_PIXEL]
        value = channels[0]
        if any(c != value for c in channels) or value not in (PIXEL_OFF, PIXEL_ON):
            raise FramebufferCorruptionError(
                f"Pixel {index} has invalid representation {bytes(channels).hex()}"
            )
        return 1 if value == PIXEL_ON else 0

    # @intent:responsibility ピクセルを0または1に設定します。
    # @intent:pre-condition stateは0か1である必要があります。
    def set(self, index: int, state: int) -> None:
        if state not in (0, 1):
            raise InvalidPixelStateError(f"Bad pixel state {state!r}; expected 0 or 1.")
        offset = self._offset(index)
        value = PIXEL_ON if state else PIXEL_OFF
        self._buffer[offset:offset + BYTES_PER_PIXEL] = bytes((value,) * BYTES_PER_PIXEL)

    # @intent:responsibility ピクセルを state XOR 現在値 に設定します（スプライト描画用）。
    def xor(self, index: int, state: int) -> None:
        if state not in (0, 1):
            raise InvalidPixelStateError(f"Bad pixel state {state!r}; expected 0 or 1.")
        self.set(index, self.get(index) ^ state)

    def clear(self) -> None:
        self._buffer = bytearray(len(self._buffer))

    # @intent:responsibility レンダラ向けにRGB24バッファのコピーを返します。
    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def pixels(self) -> List[int]:
        return [self.get(i) for i in range(self.size)]

    def __repr__(self) -> str:
        lit = sum(self.pixels())
        return f"Framebuffer({self._width}x{self._height}, lit={lit})"
