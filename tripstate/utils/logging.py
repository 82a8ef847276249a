"""Structured logging for durable preference writes."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredStoreLogger:
    """Structured logger for preference store writes."""

    def log_write(
        self,
        operation: str,
        key: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log a durable write attempt with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "key": key,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Preference write: {operation} - {outcome}"

        if outcome == "committed":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
