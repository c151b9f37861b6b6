"""Tests for DiceCog: how replies are posted back to the channel."""

from __future__ import annotations

import asyncio
import logging
import random
from types import SimpleNamespace

import discord

from cogs.dice import DiceCog
from dicebot.commands import MESSAGE_LIMIT
from dicebot.config import ConfigManager
from dicebot.entropy import EntropySource


class FakeContext:
    def __init__(self, name: str = "ryan") -> None:
        self.author = SimpleNamespace(display_name=name, id=1)
        self.channel = "table"
        self.sent: list[str] = []

    async def send(self, content: str) -> None:
        self.sent.append(content)


class FailingContext(FakeContext):
    async def send(self, content: str) -> None:
        response = SimpleNamespace(status=400, reason="Bad Request")
        raise discord.HTTPException(response, "Must be 2000 or fewer in length.")


def _cog(tmp_path, provider) -> DiceCog:
    config = ConfigManager(data_dir=str(tmp_path))
    return DiceCog(None, config, EntropySource(block_size=1, provider=provider))


def _bytes(*values: int):
    data = list(values)

    def provider(n: int) -> bytes:
        if len(data) < n:
            raise OSError("exhausted")
        chunk = data[:n]
        del data[:n]
        return bytes(chunk)

    return provider


class TestDiceCog:
    def test_single_roll_plain_text(self, tmp_path) -> None:
        cog = _cog(tmp_path, _bytes(3, 4))
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args="2d6-1"))
        assert ctx.sent == ["DICE (ryan)  ==> 2d6-1 ::= (4+5)-1 = 8"]

    def test_multiple_rolls_code_block(self, tmp_path) -> None:
        cog = _cog(tmp_path, _bytes(0, 5))
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args="d6 d6 init"))
        assert ctx.sent == [
            "```\nDICE (ryan init)  ==> 1d6 ::= 1\nDICE (ryan init)  ==> 1d6 ::= 6\n```"
        ]

    def test_invalid_is_silent(self, tmp_path) -> None:
        cog = _cog(tmp_path, _bytes())
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args="banana"))
        asyncio.run(cog.roll.callback(cog, ctx, args=""))
        assert ctx.sent == []

    def test_entropy_failure_is_silent(self, tmp_path) -> None:
        cog = _cog(tmp_path, _bytes(0))
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args="d6 d6"))
        assert ctx.sent == []

    def test_max_dice_from_config(self, tmp_path) -> None:
        cog = _cog(tmp_path, _bytes())
        cog.config.set_max_dice(2)
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args="3d6"))
        assert ctx.sent == []

    def test_ep(self, tmp_path) -> None:
        # sides=100 -> max_fair=200; 250 rejected, then 22
        cog = _cog(tmp_path, _bytes(250, 22))
        ctx = FakeContext()
        asyncio.run(cog.ep.callback(cog, ctx, args="50 hack"))
        assert ctx.sent == ["EPD (ryan hack)  ==> 22 vs 50 -- CRITICAL SUCCESS!!! (MoS = 28)"]

    def test_long_reply_split_into_messages(self, tmp_path) -> None:
        cog = _cog(tmp_path, random.Random(11).randbytes)
        ctx = FakeContext()
        asyncio.run(cog.roll.callback(cog, ctx, args=" ".join(["100d255"] * 6)))
        assert len(ctx.sent) > 1
        assert all(len(m) <= MESSAGE_LIMIT for m in ctx.sent)
        assert all(m.startswith("```\n") and m.endswith("\n```") for m in ctx.sent)
        lines = [line for m in ctx.sent for line in m[4:-4].split("\n")]
        assert len(lines) == 6
        assert all(line.startswith("DICE (ryan)  ==> 100d255 ::= ") for line in lines)

    def test_send_failure_is_logged(self, tmp_path, caplog) -> None:
        cog = _cog(tmp_path, _bytes(3))
        ctx = FailingContext()
        with caplog.at_level(logging.ERROR, logger="dicebot"):
            asyncio.run(cog.roll.callback(cog, ctx, args="d6"))
        assert "擲骰結果送出失敗" in caplog.text
