# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
CHIP-8マシンを保持し、画面表示・キー入力・実行ペースの制御を行う薄いホストです。
"""
import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtWidgets import QMainWindow, QApplication, QToolBar, QLabel, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import QTimer, Slot

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import SystemConfig
from retro_chip8.core.operation import StepStatus
from retro_chip8.loader.loader import ProgramLoader
from .display_view import DisplayView

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、マシンとUIコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    QTimerのtick毎に steps_per_frame 命令を実行し、画面を再描画します。
    """
    def __init__(self, config: Optional[SystemConfig] = None, config_dir: Optional[Union[str, Path]] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")

        self._config = config or SystemConfig()
        self._program_path: Optional[Path] = None
        self._tone_on = False

        self._setup_backend(config_dir)
        self._create_display()
        self._create_toolbar()
        self._create_menus()
        self._create_status_bar()

        self._timer = QTimer(self)
        self._timer.setInterval(self._config.timing.frame_interval_ms)
        self._timer.timeout.connect(self.run_frame)

        self._update_status()

    # @intent:responsibility 設定に基づいてマシンを構築します。
    def _setup_backend(self, config_dir: Optional[Union[str, Path]]):
        self.cpu, self.bus = SystemBuilder().build_system(self._config, config_dir)
        if self._config.program:
            program = Path(self._config.program)
            self._program_path = program if program.is_absolute() or config_dir is None else Path(config_dir) / program

    def _create_display(self):
        display = self._config.display
        self.display_view = DisplayView(self.cpu.framebuffer, display.scale, display.on_color, display.off_color, self)
        self.setCentralWidget(self.display_view)

    # @intent:responsibility メニューバーを作成し、ファイル操作（プログラムロード、リセット）アクションを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_program_action = QAction("Load Program...", self)
        self.load_program_action.setShortcut("Ctrl+O")
        self.load_program_action.triggered.connect(self._load_program_dialog)
        file_menu.addAction(self.load_program_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_machine)
        file_menu.addAction(self.reset_action)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

    def _create_status_bar(self):
        self.status_label = QLabel(self)
        self.statusBar().addWidget(self.status_label)

    def is_running(self) -> bool:
        return self._timer.isActive()

    @Slot()
    def start(self):
        self._timer.start()
        self._update_status()

    @Slot()
    def stop(self):
        self._timer.stop()
        self._update_status()

    # @intent:responsibility マシンをリセットし、ロード済みのプログラムがあれば再ロードします。
    @Slot()
    def reset_machine(self):
        was_running = self.is_running()
        self.stop()
        self.cpu.reset()
        self.display_view.set_framebuffer(self.cpu.framebuffer)
        if self._program_path is not None:
            try:
                ProgramLoader().load_file(self._program_path, self.cpu)
            except (OSError, ValueError) as e:
                logger.error("Failed to reload program %s: %s", self._program_path, e)
                self._program_path = None
                self._update_status()
                QMessageBox.critical(self, "Load Error", f"Failed to reload program:\n{e}")
                return
        self._update_status()
        if was_running:
            self.start()

    def load_program(self, path: Union[str, Path]) -> None:
        self.stop()
        self.cpu.reset()
        ProgramLoader().load_file(path, self.cpu)
        self._program_path = Path(path)
        self.display_view.set_framebuffer(self.cpu.framebuffer)
        self._update_status()

    @Slot()
    def _load_program_dialog(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Load CHIP-8 Program", "", "CHIP-8 Programs (*.ch8 *.c8);;All Files (*)"
        )
        if not file_path:
            return
        try:
            self.load_program(file_path)
        except (OSError, ValueError) as e:
            logger.error("Failed to load program %s: %s", file_path, e)
            QMessageBox.critical(self, "Load Error", f"Failed to load program:\n{e}")

    # @intent:responsibility 1フレーム分の命令を実行し、画面とステータスを更新します。
    # @intent:rationale キー入力待ちになった場合は、残りのステップを消費せずにフレームを終えます。
    @Slot()
    def run_frame(self) -> None:
        tone = False
        try:
            for _ in range(self._config.timing.steps_per_frame):
                result = self.cpu.step()
                tone = tone or result.tone
                if result.status is StepStatus.WAITING_FOR_KEY:
                    break
        except (Chip8Error, IndexError) as e:
            self.stop()
            logger.error("Emulation fault at pc=%#05x: %s", self.cpu.get_state().pc, e)
            QMessageBox.critical(self, "Emulation Fault", str(e))
            return
        finally:
            self.display_view.update()

        if tone and not self._tone_on:
            QApplication.beep()
        self._tone_on = tone
        self._update_status()

    def _update_status(self):
        state = self.cpu.get_state()
        run_state = "Running" if self.is_running() else "Stopped"
        if self.cpu.awaiting_key:
            run_state = "Waiting for key"
        self.status_label.setText(f"{run_state}  PC={state.pc:03X}  I={state.i:03X}")

    # @intent:responsibility ホストのキー名をキーパッド番号へ変換します。
    def _key_index(self, event: QKeyEvent) -> Optional[int]:
        return self._config.keymap.get(event.text().upper())

    def keyPressEvent(self, event: QKeyEvent):
        index = self._key_index(event)
        if index is None:
            super().keyPressEvent(event)
            return
        if not event.isAutoRepeat():
            self.cpu.set_key(index, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        index = self._key_index(event)
        if index is None:
            super().keyReleaseEvent(event)
            return
        if not event.isAutoRepeat():
            self.cpu.set_key(index, False)

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        super().closeEvent(event)
