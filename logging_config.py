import logging
import logging.handlers
from pathlib import Path

CONSOLE_HANDLER = "weather-console"
FILE_HANDLER = "weather-file"


def setup_logging(log_level="INFO", log_file=None):
    """Configure the root logger: console output plus an optional rotating file."""
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-15s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    installed = {handler.name for handler in logger.handlers}

    if CONSOLE_HANDLER not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file and FILE_HANDLER not in installed:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        # 5 MB per file, 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.set_name(FILE_HANDLER)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # urllib3 logs every connection at debug level
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialised at %s", log_level.upper())
