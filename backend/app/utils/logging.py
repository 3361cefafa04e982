"""Structured logging for remote calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class StructuredRemoteCallLogger:
    """Structured logger for remote calls."""

    def log_call(
        self,
        service: str,
        operation: str,
        outcome: str,
        latency_ms: float,
        target: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a remote call with structured data."""
        log_data: dict[str, Any] = {
            "service": service,
            "operation": operation,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if target:
            log_data["target"] = target
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Remote call: {service}.{operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
