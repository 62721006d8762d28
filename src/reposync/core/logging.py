"""
reposync structured logging.

Log events go through structlog into the standard logging handlers chosen by
the configuration. A RunLog times the phases of one sync run (scans, plan,
apply) and logs a single summary line once the run is over.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from reposync.core.config import LoggingConfig


_configured = False


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        handlers.append(console_handler)

    if config.file_enabled:
        config.log_directory.mkdir(parents=True, exist_ok=True)
        log_file = config.log_directory / f"reposync_{date.today():%Y%m%d}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    return handlers or [logging.NullHandler()]


def setup_logging(config: LoggingConfig) -> None:
    """Configure structlog and the stdlib handlers once per process."""
    global _configured

    if _configured:
        return

    logging.basicConfig(level=logging.DEBUG, handlers=_build_handlers(config), format="%(message)s")

    if config.json_format:
        renderer: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name or "reposync")


class RunLog:
    """
    Phase timings of one sync run.

    Durations are written into ``phases`` (phase name to seconds) so a report
    can carry them; ``finish`` logs the whole run once.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        phases: dict[str, float] | None = None,
        **context: Any,
    ) -> None:
        self.logger = logger or get_logger()
        self.phases = phases if phases is not None else {}
        self.context = context

    @contextmanager
    def phase(self, name: str, **fields: Any) -> Iterator[dict[str, Any]]:
        """Time one phase; the yielded dict collects counts to log with it."""
        start = time.monotonic()
        try:
            yield fields
        except Exception as exc:
            self.phases[name] = round(time.monotonic() - start, 3)
            self.logger.error("Sync phase failed", phase=name, error=str(exc), **fields)
            raise
        self.phases[name] = round(time.monotonic() - start, 3)
        self.logger.debug("Sync phase finished", phase=name, seconds=self.phases[name], **fields)

    @property
    def total_seconds(self) -> float:
        return round(sum(self.phases.values()), 3)

    def finish(self, **fields: Any) -> None:
        self.logger.info(
            "Sync run finished",
            phases=dict(self.phases),
            seconds=self.total_seconds,
            **self.context,
            **fields,
        )
