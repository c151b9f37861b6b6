# cogs/help.py
from __future__ import annotations

import logging
import discord
from discord.ext import commands

logger = logging.getLogger("dicebot")

# ---- 內部：產生各頁 Embed ----
def _embed_home(prefix: str) -> discord.Embed:
    e = discord.Embed(
        title="📖 指令總覽",
        description="按下方按鈕切換分類。",
        color=discord.Color.blurple(),
    )
    e.add_field(
        name="🎲 擲骰",
        value=f"`{prefix}roll <骰式...> [說明]`（同 `{prefix}dice`）｜`{prefix}ep <目標值> [說明]`",
        inline=False,
    )
    e.add_field(
        name="🛠️ 管理（開發者）",
        value=f"`{prefix}admin shutdown`｜`{prefix}admin eptest`｜`{prefix}admin dev ...`｜`{prefix}admin dice ...`",
        inline=False,
    )
    e.set_footer(text=f"提示：例如 `{prefix}roll 2d6+1 d20 攻擊`、`{prefix}ep 55 駭入`")
    return e

def _embed_dice(prefix: str) -> discord.Embed:
    e = discord.Embed(title="🎲 擲骰", color=discord.Color.green())
    e.add_field(
        name=f"{prefix}roll  /  {prefix}dice",
        value=(
            "**用法**：\n"
            f"- 一般：`{prefix}roll 2d6+1`、`{prefix}roll d20`\n"
            f"- 多個骰式：`{prefix}roll 1d8+2 2d6 傷害`（第一個不是骰式的字之後都是說明）\n"
            "**骰式**：`[顆數]d<骰面>[+/-加值]`，骰面 2~255。"
        ),
        inline=False,
    )
    e.add_field(
        name=f"{prefix}ep（Eclipse Phase）",
        value=(
            "**用法**：`{0}ep 55`、`{0}ep 40 閃避`\n"
            "**判定**：擲 00~99，小於等於目標值為成功；"
            "00/99 為極致成敗，11 的倍數為大成敗，差距 30 以上為優秀成功／嚴重失敗。".format(prefix)
        ),
        inline=False,
    )
    return e

def _embed_admin(prefix: str) -> discord.Embed:
    e = discord.Embed(title="🛠️ 管理（開發者限定）", color=discord.Color.red())
    e.add_field(
        name=f"{prefix}admin shutdown",
        value="二次確認後離開並關閉 Bot。",
        inline=False,
    )
    e.add_field(
        name=f"{prefix}admin eptest",
        value="列出目標值 50 時各種 EP 判定的結果。",
        inline=False,
    )
    e.add_field(
        name=f"{prefix}admin dev add/remove/list",
        value="管理開發者名單。",
        inline=False,
    )
    e.add_field(
        name=f"{prefix}admin dice show/maxdice",
        value="查看擲骰設定、調整單一骰式的顆數上限。",
        inline=False,
    )
    return e

PAGES = {
    "home": _embed_home,
    "dice": _embed_dice,
    "admin": _embed_admin,
}

# ---- 互動面板 ----
class HelpView(discord.ui.View):
    def __init__(self, author_id: int, prefix: str, timeout: float = 180.0):
        super().__init__(timeout=timeout)
        self.author_id = author_id
        self.prefix = prefix
        self.message: discord.Message | None = None

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.author_id:
            await interaction.response.send_message("只有發起者可以操作這個幫助面板。", ephemeral=True)
            return False
        return True

    async def on_timeout(self) -> None:
        for c in self.children:
            if isinstance(c, discord.ui.Button):
                c.disabled = True
        if self.message:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException as e:
                logger.debug(f"help 面板逾時更新失敗：{e}")

    async def _show(self, interaction: discord.Interaction, page: str):
        emb = PAGES.get(page, _embed_home)(self.prefix)
        await interaction.response.edit_message(embed=emb, view=self)

    @discord.ui.button(label="總覽", style=discord.ButtonStyle.secondary)
    async def btn_home(self, interaction: discord.Interaction, _: discord.ui.Button):
        await self._show(interaction, "home")

    @discord.ui.button(label="擲骰", style=discord.ButtonStyle.primary)
    async def btn_dice(self, interaction: discord.Interaction, _: discord.ui.Button):
        await self._show(interaction, "dice")

    @discord.ui.button(label="管理", style=discord.ButtonStyle.secondary)
    async def btn_admin(self, interaction: discord.Interaction, _: discord.ui.Button):
        await self._show(interaction, "admin")

    @discord.ui.button(label="關閉", style=discord.ButtonStyle.danger)
    async def btn_close(self, interaction: discord.Interaction, _: discord.ui.Button):
        await interaction.response.edit_message(content="（已關閉說明）", embed=None, view=None)

# ---- Cog ----
class HelpCog(commands.Cog, name="Help"):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.Cog.listener()
    async def on_ready(self):
        logger.info("HelpCog ready.")

    @commands.command(name="help", aliases=["h"], help="顯示互動式說明")
    async def help_cmd(self, ctx: commands.Context, *, section: str | None = None):
        prefix = ctx.prefix or "!"
        view = HelpView(author_id=ctx.author.id, prefix=prefix)
        sec = (section or "").lower().strip()
        page = {
            "dice": "dice", "roll": "dice", "ep": "dice",
            "admin": "admin",
        }.get(sec, "home")
        msg = await ctx.reply(embed=PAGES[page](prefix), view=view)
        view.message = msg
