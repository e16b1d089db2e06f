# chip8_tracer/core/errors.py
"""
Core Layer (エラー定義)

エンジンの実行中に発生する致命的な状態を表す例外階層を定義します。
いずれも1回の tick() の中で発生し、呼び出し元（ドライバ）へそのまま伝播します。
"""


# @intent:responsibility エンジンの致命的エラーの基底クラスです。
# @intent:rationale ドライバ側が `except Chip8Error` で一括して停止・リセット判断を行えるようにします。
class Chip8Error(Exception):
    """
    CHIP-8エンジンの致命的エラーの基底クラス。
    """
    pass


# @intent:responsibility 認識できない命令語を表します。
class UnimplementedOpcodeError(Chip8Error):
    """
    デコードできない命令語に遭遇した場合に送出されます。
    """
    def __init__(self, opcode: int, address: int):
        super().__init__(f"Unimplemented opcode {opcode:04X} at {address:#05x}")
        self.opcode = opcode
        self.address = address


# @intent:responsibility コールスタックの容量超過を表します。
class StackOverflowError(Chip8Error):
    pass


# @intent:responsibility 空のコールスタックからのポップを表します。
class StackUnderflowError(Chip8Error):
    pass


# @intent:responsibility アドレス空間外へのアクセスを表します。
# @intent:rationale Bus/RAMの範囲外アクセスは従来IndexErrorとして扱ってきたため、互換性のためIndexErrorも継承します。
class MemoryAccessError(Chip8Error, IndexError):
    pass
