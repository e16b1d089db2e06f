# src/chip8_tracer/ui/keypad.py
"""
Qtのキーコードとキーパッド番号の対応付け。
"""
import warnings
from typing import Dict

from PySide6.QtCore import Qt

# @intent:map 小文字化したキー名 -> Qt.Key の属性名（例: "pageup" -> "Key_PageUp"）。
_KEY_ATTRS: Dict[str, str] = {
    attr[4:].lower(): attr
    for attr in (getattr(Qt.Key, "__members__", None) or dir(Qt.Key))
    if attr.startswith("Key_")
}

# @intent:responsibility Qtのキー名（"Q", "1", "Space" など）からQtのキーコードを求めます。
# @intent:rationale Qtのキー名は大文字小文字が混在するため、名前は大文字小文字を区別せずに照合します。
def qt_key_code(name: str) -> int:
    attr = _KEY_ATTRS.get(str(name).lower())
    if attr is None:
        raise KeyError(name)
    key = getattr(Qt.Key, attr)
    return int(getattr(key, "value", key))

# @intent:responsibility キーマップ設定から「Qtキーコード -> キーパッド番号」の辞書を構築します。
# @intent:rationale 不明なキー名は起動を妨げないよう警告して無視します。
def build_key_lookup(keymap: Dict[str, int]) -> Dict[int, int]:
    lookup = {}
    for name, index in keymap.items():
        try:
            lookup[qt_key_code(name)] = index
        except KeyError:
            warnings.warn(f"Unknown key name '{name}' in keymap; ignored.")
    return lookup
