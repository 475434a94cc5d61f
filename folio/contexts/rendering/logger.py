"""
Rendering context logger.

Every message from the resolver, compositor, assembler and emitters carries the
[render] prefix. Resolution misses (unknown fields, skipped sections) are logged
at debug level only, since absence is the normal case and never an error.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, template_id: str = None) -> Path:
    """
    Start a rendering run log.

    Args:
        log_dir: Run directory (see utils.logger.run_log_dir)
        template_id: Template being rendered, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Template": template_id},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_summary(template_id: str, rendered, elapsed_time: float) -> None:
    """
    Log what a render produced.

    Args:
        template_id: Template used
        rendered: RenderedResume from compose_resume()
        elapsed_time: Seconds spent composing and emitting
    """
    section_names = [section.title for section in rendered.sections]
    _log_info(f"Rendered {len(section_names)} section(s) with {template_id} ({elapsed_time * 1000:.1f}ms)")
    _log_debug(f"  Sections: {', '.join(section_names) or '(none)'}")


def log_parity_mismatch(preview_segments: list, document_segments: list) -> None:
    """Log the first point where the two output trees disagree on text."""
    for index, (preview_text, document_text) in enumerate(zip(preview_segments, document_segments)):
        if preview_text != document_text:
            _log_error(f"Content mismatch at segment {index}: {preview_text!r} != {document_text!r}")
            return
    _log_error(
        f"Content mismatch: preview has {len(preview_segments)} segments, "
        f"document has {len(document_segments)}"
    )
