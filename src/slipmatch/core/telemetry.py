#!/usr/bin/env python3
"""
Error Telemetry

Best-effort error reporting to Sentry. The reporter is created once per run
and handed to the components that report failures; without a DSN it logs a
warning and every call becomes a no-op.
"""

import logging
from typing import Any

import sentry_sdk

from .config import Config

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Forward captured exceptions to Sentry when it is configured."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self.captured = 0

    @classmethod
    def from_config(cls, config: Config) -> "ErrorReporter":
        """Initialize Sentry from configuration, or return a disabled reporter."""
        dsn = config.telemetry.sentry_dsn
        if not dsn:
            logger.warning("Sentry DSN not set. Sentry error tracking will be disabled")
            return cls(enabled=False)

        sentry_sdk.init(
            dsn=dsn,
            environment=config.environment.value,
            debug=config.debug,
            traces_sample_rate=config.telemetry.traces_sample_rate,
        )
        logger.info("Sentry initialized")
        return cls(enabled=True)

    def capture_exception(self, error: BaseException, context: dict[str, Any] | None = None) -> None:
        """Report an exception with optional extra context."""
        self.captured += 1
        if not self.enabled:
            return

        with sentry_sdk.new_scope() as scope:
            for key, value in (context or {}).items():
                scope.set_extra(key, value)
            scope.capture_exception(error)

    def flush(self, timeout: float = 2.0) -> None:
        """Flush buffered events before the program terminates."""
        if self.enabled:
            sentry_sdk.flush(timeout=timeout)
