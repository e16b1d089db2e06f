# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
フレームタイマーでエンジンを駆動し、画面表示とキー入力を仲介します。
"""
import sys

from PySide6.QtWidgets import QMainWindow, QApplication, QLabel, QMessageBox
from PySide6.QtCore import QTimer
from PySide6.QtGui import QKeyEvent

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.errors import Chip8Error
from .display_view import DisplayView
from .keypad import build_key_lookup, qt_key_code

# @intent:responsibility アプリケーションのメインウィンドウ。1フレームごとに ticks_per_frame 命令とタイマー1回分を進めます。
# @intent:rationale QTimerはGUIスレッドで発火するため、tick() と tick_timers() が並行に呼ばれることはありません。
class MainWindow(QMainWindow):
    def __init__(self, cpu: Chip8Cpu, config: EmulatorConfig, title: str = "CHIP-8", parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle(title)

        self._cpu = cpu
        self._config = config
        self._key_lookup = build_key_lookup(config.keymap)

        self.display_view = DisplayView(config.display, self)
        self.setCentralWidget(self.display_view)

        self.status_label = QLabel(self)
        self.statusBar().addWidget(self.status_label)

        self._cpu.add_sound_listener(QApplication.beep)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, round(1000 / config.timing.timer_hz)))
        self._timer.timeout.connect(self.run_frame)

        self._refresh()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    # @intent:responsibility 1フレーム分エンジンを進めます。致命的エラーの場合は停止してFalseを返します。
    def run_frame(self) -> bool:
        try:
            for _ in range(self._config.timing.ticks_per_frame):
                self._cpu.tick()
            self._cpu.tick_timers()
        except Chip8Error as e:
            self.stop()
            self._refresh()
            self._handle_engine_error(e)
            return False
        self._refresh()
        return True

    def _refresh(self) -> None:
        self.display_view.set_frame(self._cpu.get_display())
        regs = self._cpu.get_register_map()
        self.status_label.setText(f"PC {regs['PC']:03X}  I {regs['I']:03X}  SP {regs['SP']}")

    def _handle_engine_error(self, error: Chip8Error) -> None:
        print(f"Emulation halted: {error}", file=sys.stderr)
        QMessageBox.critical(self, "Emulation halted", str(error))

    def keyPressEvent(self, event: QKeyEvent):
        if int(event.key()) == qt_key_code("Escape"):
            self.close()
            return
        if not self._handle_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if not self._handle_key(event, False):
            super().keyReleaseEvent(event)

    # @intent:responsibility Qtのキーイベントをキーパッド状態に変換します。オートリピートは無視します。
    def _handle_key(self, event: QKeyEvent, pressed: bool) -> bool:
        index = self._key_lookup.get(int(event.key()))
        if index is None:
            return False
        if not event.isAutoRepeat():
            self._cpu.set_key(index, pressed)
        return True

    def closeEvent(self, event):
        self.stop()
        super().closeEvent(event)
