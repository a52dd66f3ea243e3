import sys
import unittest
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor, QImage
from PySide6.QtCore import QSize

from retro_chip8.arch.chip8.display import Framebuffer
from retro_chip8.ui.display_view import DisplayView

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_size_follows_scale(self):
        view = DisplayView(Framebuffer(), scale=4)
        self.assertEqual(view.sizeHint(), QSize(256, 128))

    def test_render_image(self):
        """
        点灯ピクセルがon_color、それ以外がoff_colorで描かれることを検証します。
        """
        fb = Framebuffer()
        fb.set(fb.index_of(5, 2), 1)
        view = DisplayView(fb, scale=2, on_color=(0x33, 0xFF, 0x66), off_color=(0x00, 0x10, 0x20))

        image = view.render_image()

        self.assertEqual((image.width(), image.height()), (64, 32))
        self.assertEqual(image.format(), QImage.Format_RGB888)
        self.assertEqual(image.pixelColor(5, 2), QColor(0x33, 0xFF, 0x66))
        self.assertEqual(image.pixelColor(0, 0), QColor(0x00, 0x10, 0x20))

    def test_set_framebuffer_and_colors(self):
        view = DisplayView(Framebuffer())
        fb = Framebuffer()
        fb.set(0, 1)
        view.set_framebuffer(fb)
        view.set_colors((0xFF, 0x00, 0x00), (0x00, 0x00, 0xFF))

        image = view.render_image()
        self.assertEqual(image.pixelColor(0, 0), QColor(0xFF, 0x00, 0x00))
        self.assertEqual(image.pixelColor(1, 0), QColor(0x00, 0x00, 0xFF))

if __name__ == '__main__':
    unittest.main()
