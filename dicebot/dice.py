import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from dicebot.entropy import FairSampler, MAX_SIDES, MIN_SIDES
from dicebot.errors import OutOfRange

# 例：d6、2d6、3D10+2、2d6-1（只接受 ASCII 數字，每段最多 9 位，整個字串必須符合）
DICE_RE = re.compile(
    r"(?P<count>\d{1,9})?[dD](?P<sides>\d{1,9})(?:(?P<sign>[+-])(?P<bonus>\d{1,9}))?",
    re.ASCII,
)

@dataclass(frozen=True)
class DieSpec:
    count: int
    sides: int
    bonus: int = 0

    def __post_init__(self):
        if self.count < 1:
            raise OutOfRange(f"骰子顆數必須 >= 1：{self.count}")
        if not (MIN_SIDES <= self.sides <= MAX_SIDES):
            raise OutOfRange(f"骰面數必須在 {MIN_SIDES}~{MAX_SIDES}：{self.sides}")

@dataclass(frozen=True)
class RollOutcome:
    rolls: Tuple[int, ...]
    bonus: int
    total: int
    trace: str

class ParseErrorKind(str, Enum):
    MALFORMED = "malformed"
    ZERO_COUNT = "zero_count"
    SIDES_OUT_OF_RANGE = "sides_out_of_range"

@dataclass(frozen=True)
class ParseError:
    kind: ParseErrorKind
    text: Optional[str]

def parse(text: Optional[str]) -> Union[DieSpec, ParseError]:
    if not isinstance(text, str):
        return ParseError(ParseErrorKind.MALFORMED, text)
    m = DICE_RE.fullmatch(text)
    if not m:
        return ParseError(ParseErrorKind.MALFORMED, text)

    count = int(m.group("count") or "1")
    sides = int(m.group("sides"))
    bonus = int(m.group("bonus") or "0")
    if m.group("sign") == "-":
        bonus = -bonus

    if count == 0:
        return ParseError(ParseErrorKind.ZERO_COUNT, text)
    if not (MIN_SIDES <= sides <= MAX_SIDES):
        return ParseError(ParseErrorKind.SIDES_OUT_OF_RANGE, text)

    return DieSpec(count=count, sides=sides, bonus=bonus)

def looks_like_spec(text: Optional[str]) -> bool:
    return isinstance(parse(text), DieSpec)

def _signed(bonus: int) -> str:
    return f"{'-' if bonus < 0 else '+'}{abs(bonus)}"

def format_header(spec: DieSpec) -> str:
    header = f"{spec.count}d{spec.sides}"
    if spec.bonus:
        header += _signed(spec.bonus)
    return header

def evaluate(spec: DieSpec, sampler: FairSampler, offset: int = 1) -> RollOutcome:
    rolls = tuple(sampler.uniform(spec.sides, offset) for _ in range(spec.count))
    total = sum(rolls) + spec.bonus

    parts = [format_header(spec), " ::= "]
    if spec.bonus:
        parts.append("(")
    parts.append("+".join(map(str, rolls)))
    if spec.bonus:
        parts.append(")")
        parts.append(_signed(spec.bonus))
    # 單顆且無加值時，骰值本身就是總和
    if spec.bonus or spec.count > 1:
        parts.append(f" = {total}")

    return RollOutcome(rolls=rolls, bonus=spec.bonus, total=total, trace="".join(parts))
