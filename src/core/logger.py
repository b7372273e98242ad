import logging

import datetime

import config

# logging.basicConfig(level=logging.INFO)
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.DEBUG),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("release_catalog")


def get_logger():
    return logger


def format_date(dt: datetime.datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M")
