"""
Logging configuration for Telegram bot.

The `telegram_bot` logger is usable as soon as this module is imported (at
INFO). The app lifespan calls setup_logging() again with `settings.log_level`;
settings are not read here because importing must work without them.
"""

import logging
import sys

LOGGER_NAME = "telegram_bot"
LOG_FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'


def setup_logging(level: str = "INFO") -> logging.Logger:
    """(Re)configure the bot logger; safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Replace, not stack, handlers on repeated calls
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

    logger.propagate = False

    return logger


bot_logger = setup_logging()
