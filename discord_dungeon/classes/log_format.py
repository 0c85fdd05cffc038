import logging
from colorama import Fore, Back, Style, init
from discord_dungeon.classes.app_config import AppConfig


class ColorizedFormatter(logging.Formatter):
    level_colors = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def format(self, record):
        level_color = self.level_colors.get(record.levelno, '')
        return f"{level_color}{super().format(record)}{Style.RESET_ALL}"


def configure_logging(config: AppConfig) -> logging.Logger:
    """Install the colourised handler on the root logger, once."""
    init(autoreset=True)
    root = logging.getLogger()
    root.setLevel(config.get_log_level())
    if not any(isinstance(h.formatter, ColorizedFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(ColorizedFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        root.addHandler(handler)
    # The gateway client logs every heartbeat at INFO.
    logging.getLogger('discord').setLevel(logging.WARNING)
    return root
