import logging

from honeyllm import config

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logging.basicConfig(
    level=getattr(logging, config.LOGGING_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("honeyllm")

if config.LOGGING_LEVEL in VALID_LEVELS:
    logger.setLevel(getattr(logging, config.LOGGING_LEVEL))
else:
    logging.getLogger().warning(
        f"Invalid logging level: {config.LOGGING_LEVEL}. Using INFO."
    )
    logger.setLevel(logging.INFO)


def get_logger():
    return logger


def set_logging_level(level: str):
    normalized_level = level.upper()
    if normalized_level not in VALID_LEVELS:
        logging.getLogger().warning(
            f"Invalid logging level: {level}. Level not changed."
        )
        return
    new_level = getattr(logging, normalized_level)
    logging.getLogger().setLevel(new_level)
    logger.setLevel(new_level)
    logger.info(f"Logging level changed to: {normalized_level}")
