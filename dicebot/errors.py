class DiceError(ValueError):
    pass

class OutOfRange(DiceError):
    """參數超出允許範圍（骰面、骰數、d100 骰值）。"""

class EntropyUnavailable(DiceError):
    """無法取得亂數來源；此時不能公平擲骰，整個請求必須中止。"""
