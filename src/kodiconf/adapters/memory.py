"""System memory adapter."""

from __future__ import annotations

import logging

import psutil

logger = logging.getLogger(__name__)


class SystemMemoryAdapter:
    def total_memory(self) -> int:
        try:
            return psutil.virtual_memory().total
        except (OSError, RuntimeError) as e:
            logger.warning("Could not read total system memory: %s", e)
            return 0
