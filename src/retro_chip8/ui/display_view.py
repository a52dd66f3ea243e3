# src/retro_chip8/ui/display_view.py
"""
CHIP-8の画面を描画するウィジェット。
"""
from typing import Tuple

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QImage, QPainter
from PySide6.QtCore import QSize

from retro_chip8.arch.chip8.display import Framebuffer

Color = Tuple[int, int, int]

# @intent:responsibility フレームバッファの内容を拡大して表示するUIウィジェットを提供します。
class DisplayView(QWidget):
    """
    フレームバッファをQImage(RGB888)に変換し、scale倍で描画するウィジェット。
    """
    def __init__(self, framebuffer: Framebuffer, scale: int = 10,
                 on_color: Color = (0xFF, 0xFF, 0xFF), off_color: Color = (0x00, 0x00, 0x00), parent=None):
        super().__init__(parent)
        self._framebuffer = framebuffer
        self._scale = scale
        self._on_color = bytes(on_color)
        self._off_color = bytes(off_color)
        self.setFixedSize(QSize(framebuffer.width * scale, framebuffer.height * scale))

    # @intent:responsibility リセット等でフレームバッファが差し替わった場合に参照を更新します。
    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self.update()

    def set_colors(self, on_color: Color, off_color: Color) -> None:
        self._on_color = bytes(on_color)
        self._off_color = bytes(off_color)
        self.update()

    # @intent:responsibility 現在の画面を表示色で塗り分けたQImageを生成します。
    def render_image(self) -> QImage:
        fb = self._framebuffer
        data = b"".join(self._on_color if lit else self._off_color for lit in fb.pixels())
        # QImageはバッファを参照するだけなので、copy()で所有データにする
        return QImage(data, fb.width, fb.height, fb.width * 3, QImage.Format_RGB888).copy()

    def sizeHint(self) -> QSize:
        return QSize(self._framebuffer.width * self._scale, self._framebuffer.height * self._scale)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(self.rect(), self.render_image())
        painter.end()
