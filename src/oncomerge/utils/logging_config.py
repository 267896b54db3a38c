"""Logging configuration for oncomerge merge and classification runs.

Provides structured logging of merge and classification outcomes for auditing
why a mutation ended up in a given partition.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S'))
    return handler


class ClassificationLogger:
    """Logger for merge and classification events with structured output."""

    def __init__(self, log_dir: Path | None = None, enable_file_logging: bool = True):
        """Initialize the classification logger.

        Args:
            log_dir: Directory for the JSONL event log. Defaults to ./logs
            enable_file_logging: Whether to write the JSONL event log at all
        """
        self.logger = logging.getLogger("oncomerge.events")
        self.logger.setLevel(logging.INFO)
        self.logger.handlers.clear()
        self.logger.addHandler(_console_handler())

        # Events bypass the logger and go straight to the file as JSON lines
        self.log_file: Path | None = None
        self.file_handler: logging.FileHandler | None = None
        if enable_file_logging:
            log_dir = log_dir or Path("./logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = log_dir / f"classification_{datetime.now():%Y%m%d}.jsonl"
            self.file_handler = logging.FileHandler(self.log_file)
            self.logger.info(f"Classification event logging enabled: {self.log_file}")

    def _write_event(self, event: dict[str, Any]) -> None:
        if self.file_handler:
            self.file_handler.stream.write(json.dumps(event) + '\n')
            self.file_handler.flush()

    def log_merge(
        self,
        strategy: str,
        primary_count: int,
        secondary_count: int,
        group_count: int,
        dropped: int,
    ) -> None:
        """Log the outcome of merging called and uncalled mutations."""
        self._write_event({
            "timestamp": datetime.now().isoformat(),
            "event_type": "merge",
            "strategy": strategy,
            "called": primary_count,
            "uncalled": secondary_count,
            "groups": group_count,
            "uncalled_dropped": dropped,
        })

        self.logger.info(
            f"Merged {primary_count} called + {secondary_count} uncalled mutations "
            f"into {group_count} groups ({dropped} uncalled without a called event)"
        )

    def log_classification(
        self,
        record_type: str,
        counts: dict[str, int],
        settings: dict[str, Any],
        failed_sources: list[str],
    ) -> None:
        """Log partition sizes of a classification run."""
        self._write_event({
            "timestamp": datetime.now().isoformat(),
            "event_type": "classification",
            "record_type": record_type,
            "counts": counts,
            "settings": settings,
            "failed_sources": failed_sources,
        })

        summary = ", ".join(f"{name}: {count}" for name, count in counts.items())
        self.logger.info(f"Classified {sum(counts.values())} {record_type} → {summary}")

    def log_source_failure(self, source: str, reason: str | None) -> None:
        """Log an annotation source that failed upstream."""
        self._write_event({
            "timestamp": datetime.now().isoformat(),
            "event_type": "source_failure",
            "source": source,
            "reason": reason,
        })

        self.logger.warning(f"Annotation source '{source}' failed ({reason or 'no reason given'}); using neutral annotations")


# Global logger instance
_global_logger: ClassificationLogger | None = None


def get_logger(log_dir: Path | None = None, enable_file_logging: bool = True) -> ClassificationLogger:
    """Get or create the global classification logger."""
    global _global_logger

    if _global_logger is None:
        _global_logger = ClassificationLogger(log_dir=log_dir, enable_file_logging=enable_file_logging)

    return _global_logger


def reset_logger() -> None:
    """Reset the global logger (mainly for testing)."""
    global _global_logger
    _global_logger = None
