"""
Session logging for bookcreator scripts.

Every script run gets its own log directory holding one ``<context>.log``
file. The file keeps DEBUG detail; the console shows LOG_LEVEL and above.
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
HEADER_RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Previously added sinks are removed, so the latest session wins.

    Args:
        context_name: Log file stem ("metadata", "match", "assembly")
        log_dir: Session directory, created if missing
        extra_provenance: Key/value lines appended to the session header
        console_level: Console threshold (defaults to LOG_LEVEL)

    Returns:
        Path to the session log file

    Example:
        >>> setup_logger("metadata", Path("outs/logs/metadata_show_20261019_101500"), {"Phase": "import"})
        PosixPath('outs/logs/metadata_show_20261019_101500/metadata.log')
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level or LOG_LEVEL, colorize=True)

    log_session_header(context_name, extra_provenance)
    return log_file


def log_session_header(context_name: str, extra: Optional[Dict[str, object]] = None) -> None:
    """Record how and where this session was started."""
    logger.debug(HEADER_RULE)
    logger.info(f"bookcreator {context_name} session started {datetime.now():%Y-%m-%d %H:%M:%S}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")
    for key, value in (extra or {}).items():
        logger.info(f"{key}: {value}")
    logger.debug(HEADER_RULE)
