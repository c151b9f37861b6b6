# cogs/dice.py
import logging
import discord
from discord.ext import commands
from dicebot.commands import MESSAGE_LIMIT, dice_reply, percentile_reply, split_message
from dicebot.config import ConfigManager
from dicebot.entropy import EntropySource, FairSampler
from dicebot.errors import EntropyUnavailable

logger = logging.getLogger("dicebot")

class DiceCog(commands.Cog, name="Dice"):
    def __init__(self, bot: commands.Bot, config: ConfigManager, entropy: EntropySource):
        self.bot = bot
        self.config = config
        # 整個 bot 共用同一個亂數來源
        self.sampler = FairSampler(entropy)

    @commands.Cog.listener()
    async def on_ready(self):
        logger.info("DiceCog ready.")

    # ---- 一般擲骰 ----
    @commands.command(name="roll", aliases=["dice"], help="擲骰：!roll 2d6+1 d20 攻擊哥布林")
    async def roll(self, ctx: commands.Context, *, args: str = ""):
        who = ctx.author.display_name
        try:
            reply = dice_reply(who, args, self.sampler,
                               max_dice=self.config.get_dice_settings().max_dice)
        except EntropyUnavailable as e:
            logger.error(f"擲骰中止（{who}: {args!r}）：{e}")
            return
        if reply is None:
            return

        logger.info(f"DICE by {who} in #{ctx.channel}: {args}")
        if "\n" not in reply and len(reply) <= MESSAGE_LIMIT:
            messages = [reply]
        else:
            # 多行結果用程式碼區塊貼出，超過上限就分成多則
            messages = [f"```\n{chunk}\n```"
                        for chunk in split_message(reply, MESSAGE_LIMIT - len("```\n\n```"))]
        try:
            for m in messages:
                await ctx.send(m)
        except discord.HTTPException as e:
            logger.error(f"擲骰結果送出失敗（{who}: {args!r}）：{e}")

    # ---- Eclipse Phase d100 判定 ----
    @commands.command(name="ep", help="Eclipse Phase 百分骰判定：!ep <目標值> [說明]")
    async def ep(self, ctx: commands.Context, *, args: str = ""):
        who = ctx.author.display_name
        try:
            reply = percentile_reply(who, args, self.sampler)
        except EntropyUnavailable as e:
            logger.error(f"EP 判定中止（{who}: {args!r}）：{e}")
            return
        if reply is None:
            return

        logger.info(f"EPD by {who} in #{ctx.channel}: {args}")
        try:
            # 說明文字很長時才會超過上限
            for m in split_message(reply):
                await ctx.send(m)
        except discord.HTTPException as e:
            logger.error(f"EP 結果送出失敗（{who}: {args!r}）：{e}")
