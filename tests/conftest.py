"""Shared fixtures: scripted entropy and scripted samplers."""

from __future__ import annotations

import pytest

from dicebot.entropy import EntropySource
from dicebot.errors import EntropyUnavailable


class ByteScript:
    """Byte provider handing out a fixed script of bytes, then failing."""

    def __init__(self, data: list[int]) -> None:
        self.data = list(data)
        self.requests: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.requests.append(n)
        if len(self.data) < n:
            raise OSError("script exhausted")
        chunk, self.data = self.data[:n], self.data[n:]
        return bytes(chunk)


class ScriptedSampler:
    """Stands in for FairSampler, returning preset die values."""

    def __init__(self, values: list[int], fail_after: int | None = None) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []
        self.fail_after = fail_after

    def uniform(self, sides: int, offset: int) -> int:
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise EntropyUnavailable("scripted failure")
        self.calls.append((sides, offset))
        return self.values.pop(0)


@pytest.fixture
def scripted_source():
    """Build an EntropySource (block size 1) that yields exactly the given bytes."""

    def _make(data: list[int]) -> EntropySource:
        return EntropySource(block_size=1, provider=ByteScript(data))

    return _make


@pytest.fixture
def scripted_sampler():
    def _make(values: list[int], fail_after: int | None = None) -> ScriptedSampler:
        return ScriptedSampler(values, fail_after=fail_after)

    return _make
