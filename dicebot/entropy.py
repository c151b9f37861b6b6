import secrets
import threading
from typing import Callable

from dicebot.errors import EntropyUnavailable, OutOfRange

DEFAULT_BLOCK_SIZE = 128
MIN_SIDES = 2
MAX_SIDES = 255  # 一個 byte 能表示的最大值

class EntropySource:
    """以固定大小的區塊緩衝 CSPRNG 位元組，逐一取出。

    provider 接受長度、回傳該長度的 bytes；預設為 secrets.token_bytes。
    """

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE,
                 provider: Callable[[int], bytes] = secrets.token_bytes):
        if block_size < 1:
            raise ValueError("block_size 必須 >= 1")
        self._provider = provider
        self._block = bytearray(block_size)
        self._cursor = block_size  # 一開始視為已用完，第一次取值時才填充
        self._lock = threading.Lock()

    def fill(self, buffer: bytearray):
        try:
            data = self._provider(len(buffer))
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailable(f"亂數來源失敗：{e}") from e
        if data is None or len(data) != len(buffer):
            raise EntropyUnavailable(
                f"亂數來源回傳長度錯誤：預期 {len(buffer)}，"
                f"實際 {0 if data is None else len(data)}")
        buffer[:] = data

    def next_byte(self) -> int:
        with self._lock:
            if self._cursor >= len(self._block):
                self.fill(self._block)
                self._cursor = 0
            b = self._block[self._cursor]
            self._cursor += 1
            return b

class FairSampler:
    def __init__(self, source: EntropySource):
        self.source = source

    def uniform(self, sides: int, offset: int) -> int:
        """回傳 [offset, offset+sides-1] 間的均勻整數（拒絕取樣，無模數偏差）。"""
        if not (MIN_SIDES <= sides <= MAX_SIDES):
            raise OutOfRange(f"骰面數必須在 {MIN_SIDES}~{MAX_SIDES}：{sides}")

        # 可接受區間 [0, max_fair) 的大小是 sides 的倍數
        max_fair = (MAX_SIDES // sides) * sides
        while True:
            b = self.source.next_byte()
            if b < max_fair:
                return offset + (b % sides)
