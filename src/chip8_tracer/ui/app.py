# src/chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数を解釈し、プログラムをロードしてメインウィンドウを起動します。
"""
import argparse
import os
import random
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.loader.loader import load_program
from .main_window import MainWindow


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="Path to program image (.ch8 raw binary or Intel HEX)")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument("-s", "--scale", type=int, help="Window scale (overrides config)")
    parser.add_argument("-t", "--ticks-per-frame", type=int, help="Instructions per 60Hz frame (overrides config)")
    parser.add_argument("--seed", type=int, help="Random seed for RND")
    return parser

# @intent:responsibility 設定ファイルとコマンドライン引数から最終的な設定を組み立てます。
def resolve_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.scale is not None:
        if args.scale <= 0:
            raise ValueError("--scale must be positive")
        config.display.scale = args.scale
    if args.ticks_per_frame is not None:
        if args.ticks_per_frame <= 0:
            raise ValueError("--ticks-per-frame must be positive")
        config.timing.ticks_per_frame = args.ticks_per_frame
    if args.seed is not None:
        config.seed = args.seed
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = resolve_config(args)
        rng = random.Random(config.seed) if config.seed is not None else None
        cpu = Chip8Cpu(rng=rng)
        load_program(args.rom, cpu)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = QApplication.instance() or QApplication(sys.argv)
    main_win = MainWindow(cpu, config, title=f"CHIP-8 - {os.path.basename(args.rom)}")
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
