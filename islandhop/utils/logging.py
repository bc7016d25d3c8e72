"""Structured logging for catalog fetches."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredCatalogLogger:
    """Structured logger for catalog fetches."""

    def log_fetch(
        self,
        resource: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log catalog fetch with structured data."""
        log_data: dict[str, Any] = {
            "resource": resource,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Catalog fetch: {resource} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
