import logging
import discord
from discord.ext import commands
from dicebot.config import ConfigManager
from dicebot.percentile import self_test

logger = logging.getLogger("dicebot")

def is_dev(ctx: commands.Context, config: ConfigManager, app_owner_id: int | None):
    uid = ctx.author.id
    return (app_owner_id is not None and uid == app_owner_id) or config.is_developer(uid)

class ConfirmShutdownView(discord.ui.View):
    def __init__(self, on_confirm, requester_id: int, timeout: float = 30.0):
        super().__init__(timeout=timeout)
        self.on_confirm = on_confirm
        self.requester_id = requester_id

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.requester_id:
            await interaction.response.send_message("只有發起者可以操作這個確認。", ephemeral=True)
            return False
        return True

    @discord.ui.button(label="確認關閉", style=discord.ButtonStyle.danger)
    async def btn_confirm(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.edit_message(content="Leaving.", view=None)
        await self.on_confirm()

    @discord.ui.button(label="取消", style=discord.ButtonStyle.secondary)
    async def btn_cancel(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.edit_message(content="已取消關閉。", view=None)

class AdminCog(commands.Cog, name="Admin"):
    def __init__(self, bot: commands.Bot, config: ConfigManager, app_owner_id: int | None):
        self.bot = bot
        self.config = config
        self.app_owner_id = app_owner_id

    @commands.Cog.listener()
    async def on_ready(self):
        logger.info("AdminCog ready.")

    @commands.group(name="admin", invoke_without_command=True)
    async def admin_group(self, ctx: commands.Context):
        await ctx.reply("管理指令：`!admin shutdown`｜`!admin eptest`｜"
                        "`!admin dev add/remove/list`｜`!admin dice show/maxdice`")

    # ===== 關閉（需要二次確認，開發者限定）=====
    @admin_group.command(name="shutdown", help="離開並關閉 Bot（開發者限定，需二次確認）")
    async def admin_shutdown(self, ctx: commands.Context):
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者，不能使用此指令。")

        async def do_shutdown():
            logger.info(f"Shutdown requested by {ctx.author}")
            await self.bot.close()

        view = ConfirmShutdownView(on_confirm=do_shutdown, requester_id=ctx.author.id)
        await ctx.reply("⚠️ 確認要關閉 Bot？（30 秒內）", view=view)

    # ===== EP 判定對照表（除錯用）=====
    @admin_group.command(name="eptest", help="列出 target=50 時各種 EP 判定結果（開發者限定）")
    async def admin_eptest(self, ctx: commands.Context):
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者，不能使用此指令。")
        await ctx.send("```\n" + "\n".join(self_test(50)) + "\n```")

    # ---- 開發者名單管理 ----
    @admin_group.group(name="dev", invoke_without_command=True)
    async def admin_dev_group(self, ctx: commands.Context):
        await ctx.reply("用法：`!admin dev add @user`｜`!admin dev remove @user`｜`!admin dev list`")

    @admin_dev_group.command(name="add")
    async def admin_dev_add(self, ctx: commands.Context, user: discord.User):
        # 只有現有開發者或 App Owner 可以新增
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者，不能修改開發者名單。")
        self.config.add_dev_user(user.id)
        await ctx.reply(f"已加入開發者：{user.mention}")

    @admin_dev_group.command(name="remove")
    async def admin_dev_remove(self, ctx: commands.Context, user: discord.User):
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者，不能修改開發者名單。")
        self.config.remove_dev_user(user.id)
        await ctx.reply(f"已移除開發者：{user.mention}")

    @admin_dev_group.command(name="list")
    async def admin_dev_list(self, ctx: commands.Context):
        ids = self.config.get_dev_user_ids()
        if not ids:
            return await ctx.reply("目前沒有開發者。")
        users = [f"<@{uid}>" for uid in ids]
        await ctx.reply("開發者名單：\n" + "\n".join(users))

    # ---- 擲骰設定 ----
    @admin_group.group(name="dice", invoke_without_command=True)
    async def admin_dice_group(self, ctx: commands.Context):
        await ctx.reply("用法：`!admin dice show`｜`!admin dice maxdice <顆數>`")

    @admin_dice_group.command(name="show")
    async def admin_dice_show(self, ctx: commands.Context):
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者。")
        s = self.config.get_dice_settings()
        await ctx.reply(f"擲骰設定：max_dice=`{s.max_dice}`，entropy_block_size=`{s.entropy_block_size}`")

    @admin_dice_group.command(name="maxdice")
    async def admin_dice_maxdice(self, ctx: commands.Context, n: int):
        if not is_dev(ctx, self.config, self.app_owner_id):
            return await ctx.reply("你不是開發者。")
        try:
            self.config.set_max_dice(n)
        except ValueError as e:
            return await ctx.reply(str(e))
        await ctx.reply(f"單一骰式顆數上限已設為 **{n}**")

    @admin_dice_maxdice.error
    async def admin_dice_maxdice_error(self, ctx: commands.Context, error):
        if isinstance(error, (commands.MissingRequiredArgument, commands.BadArgument)):
            await ctx.reply("用法：`!admin dice maxdice <顆數>`")
        else:
            await ctx.reply(f"設定失敗：{error}")
            logger.error(f"admin dice maxdice error: {error}")
