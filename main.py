import logging
import os
from dotenv import load_dotenv, find_dotenv
import discord
from discord.ext import commands

from dicebot.logging_config import setup_logging
from dicebot.config import ConfigManager
from dicebot.entropy import EntropySource
from cogs.admin import AdminCog
from cogs.dice import DiceCog
from cogs.help import HelpCog

logger = logging.getLogger("dicebot")

def create_bot(config_manager: ConfigManager, prefix: str = "!") -> commands.Bot:
    intents = discord.Intents.default()
    intents.message_content = True  # 需要讀取訊息內容才能解析擲骰
    bot = commands.Bot(command_prefix=prefix, intents=intents, help_command=None)

    # 整個程序共用一個亂數來源，由 DiceCog 持有
    entropy = EntropySource(block_size=config_manager.get_dice_settings().entropy_block_size)

    @bot.event
    async def setup_hook():
        # 取得應用程式擁有者（做為預設開發者）
        app_owner_id = None
        try:
            info = await bot.application_info()
            if info and info.owner:
                app_owner_id = info.owner.id
                # 如果 config 沒有任何開發者，預設把 app owner 加進去
                if not config_manager.get_dev_user_ids():
                    config_manager.add_dev_user(app_owner_id)
                    logger.info(f"預設開發者加入：{app_owner_id}")
        except discord.HTTPException as e:
            logger.warning(f"讀取 application owner 失敗：{e}")

        # 載入各類 cogs
        await bot.add_cog(DiceCog(bot, config_manager, entropy))
        await bot.add_cog(AdminCog(bot, config_manager, app_owner_id))
        await bot.add_cog(HelpCog(bot))

    @bot.event
    async def on_ready():
        logger.info(f"Logged in as {bot.user} (id={bot.user.id})")

    return bot

def main():
    # --- 啟動階段 ---
    load_dotenv(find_dotenv())
    setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))

    token = os.getenv("DISCORD_TOKEN")
    if not token:
        raise RuntimeError("請在 .env 設定 DISCORD_TOKEN")

    config_manager = ConfigManager(data_dir=os.getenv("DICEBOT_DATA_DIR", "data"))
    bot = create_bot(config_manager, prefix=os.getenv("COMMAND_PREFIX", "!"))
    bot.run(token, log_handler=None)  # 已由 setup_logging 設定

if __name__ == "__main__":
    main()
