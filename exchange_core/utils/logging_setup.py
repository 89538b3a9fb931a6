"""
Logging Setup
=============

Configures the root logger with a rotating file handler (detailed format)
and a console handler (simple format). Library modules only ever call
``logging.getLogger(__name__)``; applications embedding the exchange hub
call ``setup_logging`` once at startup.
"""

import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logging(config=None, name: Optional[str] = None) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        config: LoggingConfig section of the settings (defaults are used when None)
        name (Optional[str]): Name of the logger to return

    Returns:
        logging.Logger: Configured logger instance
    """
    if config is None:
        from exchange_config.settings import LoggingConfig
        config = LoggingConfig()

    log_level = getattr(logging, config.level.upper(), logging.INFO)

    detailed_formatter = logging.Formatter(config.detailed_format, datefmt=config.date_format)
    simple_formatter = logging.Formatter(config.simple_format, datefmt=config.date_format)

    handlers = []

    if config.file_path:
        log_file = Path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(simple_formatter)
    handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if config.file_path else log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    # python-binance and its transports are chatty at DEBUG
    for noisy in ('urllib3', 'websockets', 'asyncio'):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(name or "exchange_core")
    logger.debug("✅ Logging system initialized")
    return logger
