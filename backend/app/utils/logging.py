"""Logging setup and structured logging for search and validation passes."""

import logging
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("backend").setLevel(numeric_level)


class StructuredTaggingLogger:
    """Structured logger for search and validation outcomes."""

    def log_search(
        self,
        sort_key: str,
        total: int,
        filtered: int,
        latency_ms: float,
        has_text: bool = False,
        required_selections: int = 0,
        optional_selections: int = 0,
    ) -> None:
        """Log a completed search pass with structured data."""
        log_data: dict[str, Any] = {
            "sort_key": sort_key,
            "total": total,
            "filtered": filtered,
            "latency_ms": round(latency_ms, 2),
            "has_text": has_text,
            "required_selections": required_selections,
            "optional_selections": optional_selections,
        }

        logger.info(
            f"Search pass: {filtered}/{total} documents ({sort_key})",
            extra={"structured": log_data},
        )

    def log_validation(
        self,
        documents: int,
        missing: int,
        codes: list[str] | None = None,
    ) -> None:
        """Log a batch validation outcome with structured data."""
        log_data: dict[str, Any] = {
            "documents": documents,
            "missing": missing,
        }

        if codes:
            log_data["codes"] = sorted(set(codes))

        if missing == 0:
            logger.info(
                f"Required tags satisfied for {documents} documents",
                extra={"structured": log_data},
            )
        else:
            logger.warning(
                f"Required tags missing: {missing} across {documents} documents",
                extra={"structured": log_data},
            )
