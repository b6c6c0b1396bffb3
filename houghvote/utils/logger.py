"""Logging utilities."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    """Stdout handler, plus a file handler when a path is given."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    return handlers


def setup_logger(name: str = 'houghvote', log_level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Configure a named logger for console and optional file output.

    Handlers from an earlier call for the same name are closed and
    replaced, so repeated setup never duplicates output.
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def setup_logger_from_config(config: Dict[str, Any], name: str = 'houghvote') -> logging.Logger:
    """Setup logger from the ``logging`` section of a config dict."""
    log_cfg = config.get('logging', {})
    return setup_logger(name, log_cfg.get('level', logging.INFO), log_cfg.get('log_file'))


def create_session_log_file(log_dir: str = 'logs') -> str:
    """Return a timestamped log file path inside log_dir, creating the directory."""
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return str(directory / f"houghvote_{stamp}.log")
