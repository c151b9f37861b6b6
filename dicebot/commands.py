"""聊天指令與骰子核心之間的轉接層。

指令參數（去掉指令名稱後的文字）進來，要貼回聊天室的回覆文字出去。
不合法的輸入一律回傳 None，由呼叫端決定直接忽略。
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from dicebot.dice import DieSpec, evaluate, parse
from dicebot.entropy import FairSampler
from dicebot.percentile import TargetError, grade, parse_target

logger = logging.getLogger("dicebot")

PERCENTILE_DIE = DieSpec(count=1, sides=100, bonus=0)
MESSAGE_LIMIT = 2000  # Discord 單則訊息字數上限

def split_message(text: str, limit: int = MESSAGE_LIMIT) -> List[str]:
    """依行切成每段不超過 limit 字的訊息；單行過長時直接硬切。"""
    if limit < 1:
        raise ValueError("limit 必須 >= 1")
    chunks: List[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if not current:
            current = line
        elif len(current) + 1 + len(line) <= limit:
            current += "\n" + line
        else:
            chunks.append(current)
            current = line
    if current:
        chunks.append(current)
    return chunks

def _prefix(tag: str, who: str, label: Optional[str]) -> str:
    inner = who if not label else f"{who} {label}"
    return f"{tag} ({inner})  ==> "

def split_dice_args(args: str, max_dice: Optional[int] = None) -> Optional[Tuple[List[DieSpec], Optional[str]]]:
    """從前面開始盡量取骰式，第一個不是骰式的字之後全部當作說明文字。

    第一個字就不是骰式時回傳 None。
    """
    tokens = (args or "").split()
    specs: List[DieSpec] = []
    label = None
    for i, tok in enumerate(tokens):
        spec = parse(tok)
        if isinstance(spec, DieSpec) and (max_dice is None or spec.count <= max_dice):
            specs.append(spec)
            continue
        if i == 0:
            logger.debug(f"忽略骰子指令：{tok!r} -> {spec}")
            return None
        label = " ".join(tokens[i:])
        break
    if not specs:
        return None
    return specs, label

def dice_reply(who: str, args: str, sampler: FairSampler, max_dice: Optional[int] = None) -> Optional[str]:
    split = split_dice_args(args, max_dice=max_dice)
    if split is None:
        return None
    specs, label = split

    # 先全部擲完再組回覆；EntropyUnavailable 直接往外拋，整個指令作廢
    outcomes = [evaluate(spec, sampler) for spec in specs]
    prefix = _prefix("DICE", who, label)
    return "\n".join(prefix + o.trace for o in outcomes)

def percentile_reply(who: str, args: str, sampler: FairSampler) -> Optional[str]:
    tokens = (args or "").split()
    if not tokens:
        return None
    target = parse_target(tokens[0])
    if isinstance(target, TargetError):
        logger.debug(f"忽略 EP 指令：{target.kind.value} ({tokens[0]!r})")
        return None
    label = " ".join(tokens[1:]) or None

    roll = evaluate(PERCENTILE_DIE, sampler, offset=0).total
    return _prefix("EPD", who, label) + grade(roll, target).text
