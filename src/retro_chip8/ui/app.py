# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import SystemConfig
from .main_window import MainWindow

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 emulator")
    parser.add_argument("program", nargs="?", help="CHIP-8 program image (.ch8)")
    parser.add_argument("--config", help="system config (YAML)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    return parser.parse_args(argv)

# @intent:responsibility 引数と設定ファイルからSystemConfigを組み立てます。コマンドラインのプログラム指定が優先されます。
def load_config(args: argparse.Namespace) -> SystemConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    if args.program:
        config.program = str(Path(args.program).resolve())
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        format='%(asctime)s,%(msecs)d %(name)s %(levelname)s %(message)s',
        datefmt='%H:%M:%S',
        level=getattr(logging, args.log_level),
    )
    config = load_config(args)
    config_dir = Path(args.config).resolve().parent if args.config else None

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config, config_dir)
    main_win.show()
    if config.program:
        main_win.start()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
