import logging
from logging.handlers import TimedRotatingFileHandler

from palletload import config

logger = logging.getLogger("palletload")
logger.setLevel(config.LOG_LEVEL)

if config.LOG_FILE:
    handler = TimedRotatingFileHandler(
        filename=config.LOG_FILE,
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
    )
else:
    handler = logging.StreamHandler()

formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
handler.setFormatter(formatter)

logger.addHandler(handler)
