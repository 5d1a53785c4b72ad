"""
Loguru setup for the monitor.

Every record carries an ``account`` field. Connector code binds it per ad
account (``log.bind(account=...)``), so a failing account can be grepped
out of the error log. Records without a binding show ``-``.
"""
from pathlib import Path
import sys

from loguru import logger

from ads_monitor.config import Settings, get_settings

LINE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[account]: <18} | "
    "{name}:{function} - {message}"
)
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[account]: <18}</magenta> | <level>{message}</level>"
)


def setup_logger(settings: Settings = None):
    """Route console output at LOG_LEVEL and keep daily files under LOG_DIR"""
    settings = settings or get_settings()
    log_dir = Path(settings.log_dir)

    logger.remove()
    logger.configure(extra={"account": "-"})

    logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=settings.log_level)

    # One file per refresh day; upstream faults are also split out
    logger.add(
        log_dir / "ads_monitor_{time:YYYY-MM-DD}.log",
        format=LINE_FORMAT,
        rotation="00:00",
        retention="14 days",
        level="INFO",
    )
    logger.add(
        log_dir / "upstream_errors_{time:YYYY-MM-DD}.log",
        format=LINE_FORMAT,
        rotation="00:00",
        retention="30 days",
        level="ERROR",
    )
    return logger


log = setup_logger()


def account_logger(account_id: str):
    """Logger bound to one ad account"""
    return log.bind(account=account_id)
