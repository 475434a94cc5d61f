"""
Templating context logger.

Messages from the library, presets and normalizer carry the [template] prefix.
Ownership changes (saves, clones) log at success level so they stand out in
run logs; substitutions made by normalization log at debug level.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, operation: str = "template") -> Path:
    """
    Start a templating run log.

    Args:
        log_dir: Run directory (see utils.logger.run_log_dir)
        operation: Operation name for provenance (e.g. "clone", "presets")

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Operation": operation},
    )


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_template_saved(template_id: str, user_id: str, version: int) -> None:
    _log_success(f"Saved template {template_id} (version {version}) for {user_id}")


def log_template_cloned(source_id: str, clone_id: str, user_id: str) -> None:
    _log_success(f"Cloned {source_id} -> {clone_id} for {user_id}")


def log_normalization_changes(template_id: str, changes: list) -> None:
    """Log every substitution normalize_template made, one debug line each."""
    if not changes:
        return
    _log_debug(f"Normalized {template_id}: {len(changes)} value(s) replaced by defaults")
    for change in changes:
        _log_debug(f"  {change}")
