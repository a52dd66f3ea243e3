"""
複数レイヤーで共有する型定義。
"""
from typing import Dict, List, NamedTuple

# @intent:data_structure ホスト側のキー名 -> キーパッド番号(0x0-0xF)。ConfigとUIで共有します。
KeyMap = Dict[str, int]

# @intent:data_structure レジスタ1本の表示名とビット幅。
class RegisterInfo(NamedTuple):
    name: str
    width: int

# @intent:data_structure 表示上まとめて並べるレジスタの組（"General", "Timers" など）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
