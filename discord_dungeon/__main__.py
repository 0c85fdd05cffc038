import argparse, asyncio, logging, sys

from discord_dungeon.classes.app_config import AppConfig
from discord_dungeon.classes.database_handler import DatabaseHandler
from discord_dungeon.classes.log_format import configure_logging
from discord_dungeon.classes.narrative_engine import NarrativeEngine
from discord_dungeon.classes.session_repository import SessionRepository
from discord_dungeon.exceptions import EngineError

logger = logging.getLogger(__name__)


def run(config: AppConfig):
    from discord_dungeon.bot import DiscordBot

    DatabaseHandler(config)
    repository = SessionRepository()
    engine = NarrativeEngine.from_config(config)
    try:
        engine.login()
    except EngineError as e:
        logger.error(f"Could not log into the narrative engine: {e}")
        return 1

    discord_bot = DiscordBot(
        token=config.get_discord_api_key(),
        config=config,
        repository=repository,
        engine=engine,
    )
    asyncio.run(discord_bot.run())
    return 0


def create_tables(config: AppConfig):
    DatabaseHandler(config).create_tables()
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="discord-dungeon")
    parser.add_argument("--config", help="Path to config.json (defaults to the bundled config directory)")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", help="Connect to Discord and start taking journeys")
    subparsers.add_parser("create_tables", help="Create the session and story tables")
    args = parser.parse_args(argv)

    config = AppConfig(args.config)
    configure_logging(config)
    try:
        if args.command == "create_tables":
            return create_tables(config)
        elif args.command == "run":
            return run(config)
        parser.print_help()
        return 2
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
