"""
Matching context logger.

Provides logging interface for matching context with automatic [match] prefix.
All matching modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from bookcreator.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[match]"


def setup_matching_logger(log_dir: Path, strategy: str = "ordinal") -> Path:
    """
    Setup logger for matching context.

    Args:
        log_dir: Directory for this matching session
        strategy: Content pairing strategy recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="match",
        log_dir=log_dir,
        extra_provenance={"Pairing strategy": strategy},
    )


# Wrapper functions with automatic [match] prefix


def _log_info(message: str) -> None:
    """Log info message with [match] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [match] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [match] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [match] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level matching logging helpers


def log_match_plan(plan, verbose: bool = False) -> None:
    """
    Log a summary of a match plan.

    Args:
        plan: MatchPlan from build_match_plan()
        verbose: Log every entry at INFO instead of DEBUG
    """
    unmatched = plan.unmatched()
    fallbacks = [entry for entry in plan.entries if entry.fallback and entry.template is not None]

    _log_success(f"Matched {len(plan.entries) - len(unmatched)}/{len(plan.entries)} content files")
    if fallbacks:
        _log_info(f"  {len(fallbacks)} matched by category fallback")
    for entry in unmatched:
        _log_warning(f"  No template for {entry.content.name} ({entry.category.value})")

    log_entry = _log_info if verbose else _log_debug
    for entry in plan.entries:
        template = entry.template.identifier if entry.template else "-"
        log_entry(f"  [{plan.ordinal_of(entry.content.name)}] {entry.content.name} -> {template} (score {entry.score})")
