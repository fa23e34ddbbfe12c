"""
Audit Logger

DESIGN DECISION: Every mutation and export in the system is logged.
This provides:
1. Complete traceability
2. Debugging capability (unreadable blobs are reported, not raised)
3. A local record of simulated exports and shares

The audit logger:
- Is synchronous; all work in this package is
- Lets logging errors propagate; nothing here swallows them
- Renders JSON by default, console output when json_logs is off
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvent models into structured log lines.
    """

    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)
        self._last_event: Optional[AuditEvent] = None

    @property
    def last_event(self) -> Optional[AuditEvent]:
        """Most recently logged event (handy in tests and the UI)."""
        return self._last_event

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._last_event = event
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_storage_read_failed(self, key: str, error_message: str) -> None:
        """Log an unreadable blob that is being treated as empty."""
        self.log(AuditEventBuilder.storage_read_failed(key, error_message))
