"""
Metadata context logger.

Provides logging interface for the metadata context with automatic [metadata] prefix.
All metadata modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from bookcreator.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[metadata]"


def setup_metadata_logger(log_dir: Path, phase: str = "import") -> Path:
    """
    Setup logger for metadata context.

    Args:
        log_dir: Directory for this session
        phase: Phase name for provenance ("import", "export" or "roundtrip")

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="metadata",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [metadata] prefix


def _log_info(message: str) -> None:
    """Log info message with [metadata] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [metadata] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [metadata] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [metadata] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [metadata] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level metadata logging helpers


def log_import_result(path: Path, result) -> None:
    """
    Log the outcome of a metadata import.

    Args:
        path: File that was imported
        result: ImportResult from import_metadata()
    """
    record = result.record
    _log_success(f"Imported {path.name}: {len(record.fields)} recognized, {len(record.extra)} passthrough fields")
    if result.input_files:
        _log_info(f"  input-files: {len(result.input_files)} content files listed")
    else:
        _log_debug("  input-files: none listed")


def log_roundtrip_result(name: str, matches: bool) -> None:
    """Log whether parse(stringify(v)) reproduced v."""
    if matches:
        _log_success(f"{name}: roundtrip preserved all values")
    else:
        _log_error(f"{name}: roundtrip changed values")
