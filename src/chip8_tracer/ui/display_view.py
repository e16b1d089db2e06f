# src/chip8_tracer/ui/display_view.py
"""
フレームバッファを描画するウィジェット。
"""
from typing import Sequence

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor

from chip8_tracer.arch.chip8.state import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8_tracer.config.models import DisplayConfig

# @intent:responsibility 64x32のモノクロ画面を指定倍率で表示します。
class DisplayView(QWidget):
    def __init__(self, config: DisplayConfig, parent=None):
        super().__init__(parent)
        self._scale = config.scale
        self._foreground = QColor(config.foreground)
        self._background = QColor(config.background)
        self._frame: Sequence[bool] = (False,) * (SCREEN_WIDTH * SCREEN_HEIGHT)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._scale, SCREEN_HEIGHT * self._scale)

    # @intent:responsibility 表示するフレームを差し替え、再描画を要求します。
    def set_frame(self, frame: Sequence[bool]) -> None:
        self._frame = frame
        self.update()

    def get_frame(self) -> Sequence[bool]:
        return self._frame

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        scale = self._scale
        for idx, lit in enumerate(self._frame):
            if lit:
                x = (idx % SCREEN_WIDTH) * scale
                y = (idx // SCREEN_WIDTH) * scale
                painter.fillRect(x, y, scale, scale, self._foreground)
        painter.end()
