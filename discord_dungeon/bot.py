import importlib, logging, pkgutil
import discord
from discord.ext import commands
from discord_dungeon.classes.app_config import AppConfig

logger = logging.getLogger(__name__)


class DiscordBot:
    discord_instance = None
    def __init__(self, token, config: AppConfig, repository, engine):
        self.token = token
        self.config = config
        self.repository = repository
        self.engine = engine
        intents = discord.Intents.default()
        intents.message_content = True
        # Mentions are the interface; the built-in help command would shadow "@bot help".
        self.bot = commands.Bot(
            command_prefix=config.get_command_prefix(),
            intents=intents,
            help_command=None,
        )
        DiscordBot.discord_instance = self

    @classmethod
    def get_instance(cls):
        return cls.discord_instance

    async def on_ready(self):
        logger.info(f"Bot is ready as {self.bot.user} ({self.bot.user.id})")

    async def run(self):
        await self.load_cogs()
        self.bot.event(self.on_ready)
        await self.bot.start(self.token)

    async def load_cogs(self, cogs_package="discord_dungeon.cogs"):
        package = importlib.import_module(cogs_package)
        for module_info in pkgutil.iter_modules(package.__path__):
            cog_path = f"{cogs_package}.{module_info.name}"
            try:
                cog_module = importlib.import_module(cog_path)
                cog_class = getattr(cog_module, module_info.name.capitalize())
                await self.bot.add_cog(cog_class(self.bot))
                logger.debug(f"Loaded cog: {cog_path}")
            except Exception:
                logger.exception(f"Failed to load cog: {cog_path}")
                raise
