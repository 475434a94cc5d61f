"""
Export context logger.

Wraps loguru with an automatic [export] prefix. Painters and writers import
from here, never from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[export]"


def setup_export_logger(log_dir: Path, output_format: str, template_id: str = None) -> Path:
    """
    Start an export run log.

    Args:
        log_dir: Run directory (see utils.logger.run_log_dir)
        output_format: "html", "docx" or "pdf"
        template_id: Template being exported

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="export",
        log_dir=log_dir,
        extra_provenance={"Format": output_format, "Template": template_id},
    )


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_export_result(result) -> None:
    """
    Log the outcome of an export.

    Args:
        result: ExportResult from write_html(), write_docx() or write_pdf()
    """
    if result.success:
        _log_success(f"Wrote {result.output_path} ({result.block_count} blocks)")
    else:
        _log_error(f"Export to {result.output_path} failed: {result.error}")
