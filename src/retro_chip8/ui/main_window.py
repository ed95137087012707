# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
ROMの選択、エミュレーションの駆動（QTimer）、キー入力のディスパッチを担当します。
"""
import os
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QLabel, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QKeyEvent, QCloseEvent
from PySide6.QtCore import QTimer, Slot

from retro_chip8.core.errors import Chip8Error
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.loader.loader import RomLoader
from retro_chip8.runtime.interpreter import Interpreter
from .display_view import DisplayView, qt_key_to_host_name

# @intent:responsibility アプリケーションのメインウィンドウを定義し、インタプリタとUIを接続します。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    """
    def __init__(self, config: Optional[EmulatorConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")

        self._config = config or EmulatorConfig()
        self._rom: Optional[bytes] = None
        self._rom_name = ""

        self.display_view = DisplayView(
            scale=self._config.display.scale,
            foreground=self._config.display.foreground,
            background=self._config.display.background,
        )
        self.setCentralWidget(self.display_view)

        self.status_label = QLabel("No file selected.")
        self.statusBar().addWidget(self.status_label)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_frame)

        self._setup_backend()
        self._create_menus()
        self._update_ui_state(False)

    @property
    def interpreter(self) -> Interpreter:
        return self._interpreter

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    # @intent:responsibility 設定に基づいてインタプリタを生成し、フレームの購読を登録します。
    def _setup_backend(self):
        self._interpreter = SystemBuilder().build_system(self._config)
        self._interpreter.display.subscribe(self.display_view.set_frame)
        self._timer.setInterval(max(1, 1000 // self._config.frame_rate))

    def _create_menus(self):
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")

        self.open_rom_action = QAction("Open ROM...", self)
        self.open_rom_action.setShortcut("Ctrl+O")
        self.open_rom_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.open_rom_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._load_config_dialog)
        file_menu.addAction(self.load_config_action)

        emulation_menu = menu_bar.addMenu("Emulation")

        self.reset_action = QAction("Reset", self)
        self.reset_action.setShortcut("Ctrl+R")
        self.reset_action.triggered.connect(self.reset)
        emulation_menu.addAction(self.reset_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        emulation_menu.addAction(self.stop_action)

    # @intent:responsibility 実行状態に応じてメニュー項目の有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        self.reset_action.setEnabled(self._rom is not None)
        self.stop_action.setEnabled(is_running)

    # @intent:responsibility ROMファイルを読み込み、セッションを開始します。
    def open_rom(self, file_path: str) -> None:
        self.stop()
        self._rom = RomLoader().load_into(file_path, self._interpreter)
        self._rom_name = os.path.basename(file_path)
        self.start()

    # @intent:responsibility 現在のROMでセッションを最初からやり直します。
    @Slot()
    def reset(self) -> None:
        if self._rom is None:
            return
        self.stop()
        self._interpreter.init(self._rom)
        self.start()

    def start(self) -> None:
        self._timer.start()
        self.status_label.setText(f"Running: {self._rom_name}")
        self._update_ui_state(True)
        self.display_view.setFocus()

    @Slot()
    def stop(self) -> None:
        self._timer.stop()
        self._update_ui_state(False)

    # @intent:responsibility ホストのフレームごとにインタプリタを1サイクル駆動します。
    @Slot()
    def _on_frame(self):
        try:
            self._interpreter.drive()
        except Chip8Error as e:
            self.stop()
            self.status_label.setText(f"Halted: {e}")
            QMessageBox.critical(self, "Emulation Error", str(e))
            return

        if self._interpreter.is_paused:
            self.status_label.setText(f"Waiting for key: {self._rom_name}")
        else:
            self.status_label.setText(f"Running: {self._rom_name}")

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.open_rom(file_name)
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    # @intent:responsibility 設定を適用し直します。ROMがロード済みなら新しい設定で再開します。
    def apply_config(self, config: EmulatorConfig) -> None:
        self.stop()
        self._interpreter.display.unsubscribe(self.display_view.set_frame)
        self._config = config
        self.display_view.set_colors(config.display.foreground, config.display.background)
        self._setup_backend()
        if self._rom is not None:
            self._interpreter.init(self._rom)
            self.start()

    @Slot()
    def _load_config_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self.apply_config(ConfigLoader().load_from_file(file_name))
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load config: {e}")

    # @intent:responsibility キー入力をキーマップ経由でキーパッドへ転送します。オートリピートは無視します。
    def keyPressEvent(self, event: QKeyEvent):
        name = qt_key_to_host_name(event.key())
        if name is not None and not event.isAutoRepeat() and self._interpreter.press_host_key(name):
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        name = qt_key_to_host_name(event.key())
        if name is not None and not event.isAutoRepeat() and self._interpreter.release_host_key(name):
            event.accept()
            return
        super().keyReleaseEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        event.accept()

