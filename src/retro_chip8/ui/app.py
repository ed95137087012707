# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。

    retro-chip8 [ROM] [CONFIG.yaml]
"""
import sys
from PySide6.QtWidgets import QApplication, QMessageBox

from retro_chip8.core.errors import Chip8Error
from retro_chip8.config.loader import ConfigLoader
from .main_window import MainWindow

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main():
    """
    アプリケーションのメイン関数。
    """
    app = QApplication(sys.argv)
    args = app.arguments()[1:]

    config = None
    if len(args) > 1:
        try:
            config = ConfigLoader().load_from_file(args[1])
        except (OSError, Chip8Error) as e:
            print(f"Failed to load config {args[1]}: {e}", file=sys.stderr)
            sys.exit(1)

    main_win = MainWindow(config)
    main_win.show()

    if args:
        try:
            main_win.open_rom(args[0])
        except (OSError, Chip8Error) as e:
            QMessageBox.critical(main_win, "Error", f"Failed to load ROM: {e}")

    sys.exit(app.exec())

if __name__ == '__main__':
    main()
