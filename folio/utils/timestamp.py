"""Timestamp helpers for log directories, template ids and stored template records."""

import time
from datetime import datetime


def now() -> str:
    """Compact local timestamp for run directories (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds, stored as createdAt / updatedAt."""
    return datetime.now().isoformat()


def epoch_millis() -> int:
    """Milliseconds since the epoch; the numeric part of generated template ids."""
    return int(time.time() * 1000)
