"""
Logging configuration for the hotel admin console.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    component_name: str,
    level=logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
):
    """
    Configure the root logger for the console.

    Args:
        component_name: Name shown in every log line (e.g. 'admin')
        level: Logging level, either a number or a name such as "INFO"
        log_file: Optional file path for log output
        format_string: Custom format string (default provided)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if format_string is None:
        format_string = f'[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if log_file:
        log_path = Path(log_file).resolve()
        root = logging.getLogger()
        # The app factory may run more than once per process
        attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == log_path
            for h in root.handlers
        )
        if not attached:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(logging.Formatter(format_string, datefmt=DATE_FORMAT))
            root.addHandler(file_handler)

    logger = logging.getLogger(component_name)
    logger.info("%s logging initialized (level=%s)", component_name.upper(), logging.getLevelName(level))

    return logger
