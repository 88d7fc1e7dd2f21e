"""
➡️ But : Configurer loguru en un seul endroit.

configure_logging(settings) : supprime le handler par défaut, ajoute la sortie console
et, si LOG_FILE est défini, un fichier avec rotation.

Tous les autres modules font simplement : from loguru import logger
"""

import sys

from loguru import logger

from todo_api.core.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(settings: Settings) -> None:
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.LOG_LEVEL,
        colorize=True,
    )

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
        )
