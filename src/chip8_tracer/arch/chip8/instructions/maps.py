# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, Optional, Tuple

from . import control
from . import alu
from . import load
from . import display
from . import keypad

Nibbles = Tuple[int, int, int, int]

# @intent:utility_function 先頭ニブル以外で命令を区別する必要のない系統用のセレクタ。
def select_none(nibbles: Nibbles) -> Optional[int]:
    return None

def select_n(nibbles: Nibbles):
    return nibbles[3]

def select_yn(nibbles: Nibbles):
    return (nibbles[2], nibbles[3])

def select_xyn(nibbles: Nibbles):
    return (nibbles[1], nibbles[2], nibbles[3])

# @intent:map 先頭ニブル -> (後続ニブルのセレクタ, セレクタ値 -> 命令パターン) の2段デコード表。
# @intent:rationale 0, 8, E, F 系統のように先頭ニブルを共有する命令は、後続ニブルで区別します。
FAMILY_MAP: Dict[int, Tuple[Callable[[Nibbles], object], Dict[object, str]]] = {
    0x0: (select_xyn, {
        (0x0, 0x0, 0x0): "0000",
        (0x0, 0xE, 0x0): "00E0",
        (0x0, 0xE, 0xE): "00EE",
    }),
    0x1: (select_none, {None: "1NNN"}),
    0x2: (select_none, {None: "2NNN"}),
    0x3: (select_none, {None: "3XNN"}),
    0x4: (select_none, {None: "4XNN"}),
    0x5: (select_n, {0x0: "5XY0"}),
    0x6: (select_none, {None: "6XNN"}),
    0x7: (select_none, {None: "7XNN"}),
    0x8: (select_n, {
        0x0: "8XY0",
        0x1: "8XY1",
        0x2: "8XY2",
        0x3: "8XY3",
        0x4: "8XY4",
        0x5: "8XY5",
        0x6: "8XY6",
        0x7: "8XY7",
        0xE: "8XYE",
    }),
    0x9: (select_n, {0x0: "9XY0"}),
    0xA: (select_none, {None: "ANNN"}),
    0xB: (select_none, {None: "BNNN"}),
    0xC: (select_none, {None: "CXNN"}),
    0xD: (select_none, {None: "DXYN"}),
    0xE: (select_yn, {
        (0x9, 0xE): "EX9E",
        (0xA, 0x1): "EXA1",
    }),
    0xF: (select_yn, {
        (0x0, 0x7): "FX07",
        (0x0, 0xA): "FX0A",
        (0x1, 0x5): "FX15",
        (0x1, 0x8): "FX18",
        (0x1, 0xE): "FX1E",
        (0x2, 0x9): "FX29",
        (0x3, 0x3): "FX33",
        (0x5, 0x5): "FX55",
        (0x6, 0x5): "FX65",
    }),
}

VX = "V{x:X}"
VY = "V{y:X}"
BYTE = "#${nn:02X}"
ADDR = "${nnn:03X}"

# @intent:map 命令パターン -> (ニーモニック, オペランド書式のリスト)。
MNEMONIC_MAP: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "0000": ("NOP", ()),
    "00E0": ("CLS", ()),
    "00EE": ("RET", ()),
    "1NNN": ("JP", (ADDR,)),
    "2NNN": ("CALL", (ADDR,)),
    "3XNN": ("SE", (VX, BYTE)),
    "4XNN": ("SNE", (VX, BYTE)),
    "5XY0": ("SE", (VX, VY)),
    "6XNN": ("LD", (VX, BYTE)),
    "7XNN": ("ADD", (VX, BYTE)),
    "8XY0": ("LD", (VX, VY)),
    "8XY1": ("OR", (VX, VY)),
    "8XY2": ("AND", (VX, VY)),
    "8XY3": ("XOR", (VX, VY)),
    "8XY4": ("ADD", (VX, VY)),
    "8XY5": ("SUB", (VX, VY)),
    "8XY6": ("SHR", (VX,)),
    "8XY7": ("SUBN", (VX, VY)),
    "8XYE": ("SHL", (VX,)),
    "9XY0": ("SNE", (VX, VY)),
    "ANNN": ("LD", ("I", ADDR)),
    "BNNN": ("JP", ("V0", ADDR)),
    "CXNN": ("RND", (VX, BYTE)),
    "DXYN": ("DRW", (VX, VY, "{n}")),
    "EX9E": ("SKP", (VX,)),
    "EXA1": ("SKNP", (VX,)),
    "FX07": ("LD", (VX, "DT")),
    "FX0A": ("LD", (VX, "K")),
    "FX15": ("LD", ("DT", VX)),
    "FX18": ("LD", ("ST", VX)),
    "FX1E": ("ADD", ("I", VX)),
    "FX29": ("LD", ("F", VX)),
    "FX33": ("LD", ("B", VX)),
    "FX55": ("LD", ("[I]", VX)),
    "FX65": ("LD", (VX, "[I]")),
}

# @intent:map 命令パターン -> 実行関数。
EXECUTE_MAP = {
    # Control
    "0000": control.execute_nop,
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XNN": control.execute_se_imm,
    "4XNN": control.execute_sne_imm,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,

    # ALU
    "6XNN": alu.execute_ld_imm,
    "7XNN": alu.execute_add_imm,
    "8XY0": alu.execute_ld_reg,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "CXNN": alu.execute_rnd,

    # Index / Memory / Timers
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX1E": load.execute_add_i,
    "FX29": load.execute_ld_f,
    "FX33": load.execute_ld_b,
    "FX55": load.execute_store_registers,
    "FX65": load.execute_load_registers,

    # Display
    "00E0": display.execute_cls,
    "DXYN": display.execute_drw,

    # Keypad
    "EX9E": keypad.execute_skp,
    "EXA1": keypad.execute_sknp,
    "FX0A": keypad.execute_wait_key,
}
