"""
Logger setup shared by every context.

Each CLI run logs into its own directory under LOGS_PATH: a DEBUG-level file
sink plus a colourised console sink on stderr (stdout is left to command
output, e.g. `render_resume.py parity -v`). Context wrappers with their
[template] / [render] / [export] prefixes live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio import __version__
from folio.utils.timestamp import now

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LEVEL = os.getenv("FOLIO_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def run_log_dir(run_name: str, logs_path: Path = None) -> Path:
    """
    Directory for one run's logs, e.g. outs/logs/render_20251114_123456.

    Args:
        run_name: Run kind ("render", "export", "template")
        logs_path: Root log directory. Defaults to LOGS_PATH.
    """
    return (logs_path or LOGS_PATH) / f"{run_name}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = None,
) -> Path:
    """
    Point loguru at a fresh file sink and a console sink, then log provenance.

    Any sinks configured earlier (including loguru's default) are removed, so
    calling this twice in one process starts a new log file.

    Args:
        context_name: Log file stem ("template", "render", "export")
        log_dir: Run directory; created if missing
        extra_provenance: Extra header lines, e.g. {"Template": "ats-default"}
        console_level: Console threshold. Defaults to FOLIO_LOG_LEVEL (INFO).

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger("export", run_log_dir("export"), {"Template": "ats-default"})
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level or CONSOLE_LEVEL, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write the run header: command line, working directory, folio and Python versions."""
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"folio {__version__} on Python {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
