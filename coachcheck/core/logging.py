"""Structured logging configuration."""

import logging
import sys
from typing import Any

from coachcheck.core.config import settings

# Context attributes copied from ``extra=`` into structured output, in order
CONTEXT_FIELDS = ("request_id", "client_id", "form_id", "submission_id", "profile")


class StructuredFormatter(logging.Formatter):
    """Render records as space-separated key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                fields[name] = value

        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{key}={value}" for key, value in fields.items())


def setup_logging() -> None:
    """Configure the root logger for the service.

    Development gets a human-readable line format; every other environment
    gets key=value output that log shippers can parse.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if settings.is_dev:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    else:
        handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class ScoringEventLogger:
    """Logger for scoring outcomes, kept separate so they can be routed on their own."""

    def __init__(self) -> None:
        self.logger = get_logger("coachcheck.scoring_events")

    def scored(
        self,
        score: int,
        status: str,
        profile: str,
        answered: int,
        total: int,
    ) -> None:
        """Log a scored check-in."""
        self.logger.info(
            f"SCORED: score={score} status={status} answered={answered}/{total}",
            extra={"profile": profile},
        )

    def progress_built(self, check_ins: int, questions: int, trend: str) -> None:
        """Log a built progress view."""
        self.logger.info(
            f"PROGRESS: check_ins={check_ins} questions={questions} trend={trend}"
        )


scoring_events = ScoringEventLogger()
