"""
Display View モジュール。

FrameBuffer が present() したフレームを、指定した倍率のブロックとして描画するウィジェットです。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from retro_chip8.peripherals.display import Frame, SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:utility_function Qtのキーコードをキーマップで使うホストのキー名（英数字1文字）に変換します。
def qt_key_to_host_name(key: int) -> Optional[str]:
    key = int(key)
    if int(Qt.Key.Key_0) <= key <= int(Qt.Key.Key_9) or int(Qt.Key.Key_A) <= key <= int(Qt.Key.Key_Z):
        return chr(key)
    return None


# @intent:responsibility 64x32のフレームを拡大して描画します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, foreground: str = "#E0E0E0", background: str = "#101010", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._frame: Frame = tuple(tuple([False] * SCREEN_WIDTH) for _ in range(SCREEN_HEIGHT))
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setFocusPolicy(Qt.StrongFocus)

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._scale, SCREEN_HEIGHT * self._scale)

    @property
    def frame(self) -> Frame:
        return self._frame

    def set_colors(self, foreground: str, background: str) -> None:
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self.update()

    # @intent:responsibility FrameBufferの購読者として呼ばれ、再描画を要求します。
    def set_frame(self, frame: Frame) -> None:
        self._frame = frame
        self.update()

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)

        # ウィンドウサイズに合わせて整数倍で拡大し、中央に配置する
        cell = max(1, min(self.width() // SCREEN_WIDTH, self.height() // SCREEN_HEIGHT))
        offset_x = (self.width() - cell * SCREEN_WIDTH) // 2
        offset_y = (self.height() - cell * SCREEN_HEIGHT) // 2

        for y, row in enumerate(self._frame):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(offset_x + x * cell, offset_y + y * cell, cell, cell, self._foreground)
        painter.end()
