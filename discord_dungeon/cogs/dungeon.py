from discord.ext import commands
import logging
import discord

from discord_dungeon.bot import DiscordBot
from discord_dungeon.classes.dungeon_master import DungeonMaster
from discord_dungeon.classes.identity import DiscordIdentityResolver
from discord_dungeon.classes.intent_classifier import IntentClassifier
from discord_dungeon.classes.intents import ChatEvent
from discord_dungeon.classes.notifier import DiscordNotifier

logger = logging.getLogger(__name__)


class Dungeon(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.dungeon_master = None

    @staticmethod
    def event_from_message(message) -> ChatEvent:
        channel = message.channel
        thread_timestamp = None
        if isinstance(channel, discord.Thread):
            thread_timestamp = str(channel.id)
        author = getattr(message, "author", None)
        return ChatEvent(
            channel_id=str(channel.id),
            author_id=str(author.id) if author is not None else "",
            text=message.content or "",
            event_timestamp=str(message.id),
            thread_timestamp=thread_timestamp,
            direct=isinstance(channel, discord.DMChannel),
        )

    def _get_dungeon_master(self) -> DungeonMaster:
        # Built on first use: the bot's own id is only known once logged in.
        if self.dungeon_master is None:
            owner = DiscordBot.get_instance()
            config = owner.config
            self_id = config.get_self_id() or str(self.bot.user.id)
            self.dungeon_master = DungeonMaster(
                classifier=IntentClassifier(self_id, config.get_banker_id()),
                repository=owner.repository,
                engine=owner.engine,
                notifier=DiscordNotifier(self.bot),
                resolver=DiscordIdentityResolver(self.bot),
                cost_gp=config.get_cost_gp(),
                banker_id=config.get_banker_id(),
                play_channel_id=config.get_play_channel_id(),
                bot_name=self.bot.user.display_name,
            )
            logger.info(f"Dungeon master ready as {self_id}")
        return self.dungeon_master

    @commands.Cog.listener()
    async def on_message(self, message):
        if message.is_system():
            return
        event = self.event_from_message(message)
        await self._get_dungeon_master().handle_event(event)
