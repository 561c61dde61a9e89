"""
Assembly context logger.

Provides logging interface for assembly context with automatic [assembly] prefix.
All assembly modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from bookcreator.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[assembly]"


def setup_assembly_logger(log_dir: Path, book_name: str) -> Path:
    """
    Setup logger for assembly context.

    Args:
        log_dir: Directory for this planning session
        book_name: Book being planned, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="assembly",
        log_dir=log_dir,
        extra_provenance={"Book": book_name},
    )


# Wrapper functions with automatic [assembly] prefix


def _log_info(message: str) -> None:
    """Log info message with [assembly] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [assembly] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [assembly] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [assembly] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level assembly logging helpers


def log_generation_plan(plan) -> None:
    """
    Log a generation plan summary.

    Args:
        plan: GenerationPlan from plan_documents()
    """
    included = [document for document in plan.documents if document.in_book]
    paired = [document for document in plan.documents if document.content]

    _log_success(f"Planned {plan.book_file}: {len(included)} documents in book, {len(plan.documents)} total")
    if paired:
        _log_info(f"  {len(paired)} documents receive content")
    for name in plan.unpaired_content:
        _log_warning(f"  Content file without a document: {name}")
    for document in plan.documents:
        _log_debug(f"  {document.output_name} <- {document.template} ({document.role.value})")
