# dicebot/percentile.py
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from dicebot.errors import OutOfRange

TARGET_RE = re.compile(r"[+-]?\d{1,9}", re.ASCII)  # 位數上限避免超長數字字串

# 除錯用對照表（target=50 時涵蓋每一種判定）
SELF_TEST_ROLLS = (0, 20, 22, 40, 44, 50, 60, 66, 80, 88, 99)

@dataclass(frozen=True)
class PercentileGrade:
    roll: int
    target: int
    is_critical: bool
    is_success: bool
    margin: int
    label: str

    @property
    def text(self) -> str:
        s = f"{self.roll:02d} vs {self.target:02d} -- {self.label}"
        if self.margin > 0:
            s += f" ({'MoS' if self.is_success else 'MoF'} = {self.margin})"
        return s

def grade(roll: int, target: int) -> PercentileGrade:
    if not (0 <= roll <= 99):
        raise OutOfRange(f"d100 骰值必須在 0~99：{roll}")

    is_critical = (roll % 11 == 0)  # 00, 11, 22, ... 99
    is_success = (roll <= target) and (roll != 99)  # 99 一律失敗

    if is_success:
        margin = target - roll
        if roll == 0:
            label = "ULTIMATE SUCCESS!!!"
        elif is_critical:
            label = "CRITICAL SUCCESS!!!"
        elif margin >= 30:
            label = "Excellent Success!"
        else:
            label = "Success!"
    else:
        margin = max(roll - target, 0)  # 99 對上 >= 99 的目標值時沒有差距可言
        if roll == 99:
            label = "ULTIMATE FAILURE!!"
        elif is_critical:
            label = "CRITICAL FAILURE"
        elif margin >= 30:
            label = "Severe Failure"
        else:
            label = "Failure"

    return PercentileGrade(roll=roll, target=target, is_critical=is_critical,
                           is_success=is_success, margin=margin, label=label)

class TargetErrorKind(str, Enum):
    NON_NUMERIC_TARGET = "non_numeric_target"
    NEGATIVE_TARGET = "negative_target"

@dataclass(frozen=True)
class TargetError:
    kind: TargetErrorKind
    text: Optional[str]

def parse_target(token: Optional[str]) -> Union[int, TargetError]:
    if not isinstance(token, str) or not TARGET_RE.fullmatch(token):
        return TargetError(TargetErrorKind.NON_NUMERIC_TARGET, token)
    target = int(token)
    if target < 0:
        return TargetError(TargetErrorKind.NEGATIVE_TARGET, token)
    return target

def self_test(target: int = 50) -> List[str]:
    return [grade(r, target).text for r in SELF_TEST_ROLLS]
