"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resume_structurer.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, source: str = "text") -> Path:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this parsing session
        source: Where the parsed text came from, for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Source": source},
    )


# Wrapper functions with automatic [intake] prefix


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_parse_result(result, elapsed_time: float) -> None:
    """
    Log the outcome of a parse call.

    Args:
        result: ParseResult from parse_resume_text()
        elapsed_time: Time taken in seconds
    """
    if result.success:
        record = result.record
        _log_success(
            f"Parsed resume for '{record.name or '[no name]'}' ({elapsed_time:.3f}s): "
            f"{len(record.experience)} experience, {len(record.education)} education, "
            f"{len(record.projects)} projects, {len(record.skills)} skills"
        )
    else:
        _log_error(f"Generator returned an error message ({elapsed_time:.3f}s)")
        _log_error(f"  Message: {result.error_message}")

    if result.diagnostics:
        _log_warning(f"{len(result.diagnostics)} line(s) skipped")
        for diagnostic in result.diagnostics:
            _log_debug(f"  {diagnostic}")
