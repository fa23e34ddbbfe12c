"""
Export Executor

Runs template exports (one-click presets, recorded in the history log) and
ad-hoc exports from the export dialog.

DESIGN DECISION: The only asynchronous step is a simulated processing
delay that gives the UI time to show progress. The sleep function, the
clock and the artifact sink are all injected, so tests run instantly and
deterministically. No network I/O happens anywhere: destinations other
than "download" and "email" are simulated sends that are only logged.

Every template export that returns has status "completed"; there is no
path producing "failed" or "pending".
"""

import asyncio
from datetime import date, datetime
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Optional

import structlog

from expense_tracker.audit import AuditLogger
from expense_tracker.engine.aggregation import total_amount
from expense_tracker.engine.filtering import select_expenses
from expense_tracker.export.serializers import serialize
from expense_tracker.export.templates import apply_template
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import Expense, SortKey, SortOrder, utc_now
from expense_tracker.models.export import (
    DEFAULT_COLUMNS,
    FORMAT_EXTENSIONS,
    FORMAT_MEDIA_TYPES,
    ExportArtifact,
    ExportFormat,
    ExportHistoryEntry,
    ExportOptions,
    ExportStatus,
    ExportTemplate,
)
from expense_tracker.services.history import ExportHistoryService

ArtifactSink = Callable[[ExportArtifact], None]
Sleep = Callable[[float], Awaitable[None]]

LOCAL_DESTINATIONS = frozenset({"download", "email"})

QUICK_EXPORT_TITLE = "Expense Report"
DEFAULT_EXPORT_PREFIX = "expenses"


class DirectorySink:
    """Artifact sink that saves each artifact as a file in a directory."""

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    def __call__(self, artifact: ExportArtifact) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        (self._directory / artifact.filename).write_text(artifact.content, encoding="utf-8")


def default_filename(prefix: str, today: date) -> str:
    """`<prefix>-<YYYY-MM-DD>` without extension."""
    return f"{prefix}-{today.isoformat()}"


class ExportExecutor:
    """
    Applies filters, serializes and delivers exports.

    Args:
        history: History log that template exports are appended to
        sink: Receives artifacts for local destinations
        sleep: Awaitable delay used to simulate processing
        clock: Source of the current time
        export_delay: Seconds a template export "takes"
        quick_export_delay: Seconds an ad-hoc export "takes"
    """

    def __init__(
        self,
        history: ExportHistoryService,
        sink: ArtifactSink,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = utc_now,
        export_delay: float = 1.2,
        quick_export_delay: float = 0.6,
        currency_symbol: str = "$",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._history = history
        self._sink = sink
        self._sleep = sleep
        self._clock = clock
        self._export_delay = export_delay
        self._quick_export_delay = quick_export_delay
        self._currency_symbol = currency_symbol
        self._audit_logger = audit_logger or AuditLogger()
        self._logger = structlog.get_logger(__name__)

    def build_artifact(
        self,
        expenses: list[Expense],
        export_format: ExportFormat,
        filename: str,
        title: str,
        columns=DEFAULT_COLUMNS,
    ) -> ExportArtifact:
        """Serialize expenses into an artifact named `<filename>.<ext>`."""
        export_format = ExportFormat(export_format)
        content = serialize(
            expenses,
            export_format,
            title=title,
            columns=columns,
            generated_on=self._clock().date(),
            currency_symbol=self._currency_symbol,
        )
        return ExportArtifact(
            filename=f"{filename}.{FORMAT_EXTENSIONS[export_format]}",
            media_type=FORMAT_MEDIA_TYPES[export_format],
            content=content,
            record_count=len(expenses),
        )

    async def execute_export(
        self,
        expenses: Iterable[Expense],
        template: ExportTemplate,
        destination: str,
    ) -> ExportHistoryEntry:
        """
        Run a template export to a destination and record it in history.

        "download" and "email" hand the artifact to the sink; any other
        destination is a simulated send.
        """
        today = self._clock().date()
        selected = apply_template(expenses, template, today=today)
        total = total_amount(selected)

        await self._sleep(self._export_delay)

        artifact = self.build_artifact(
            selected,
            template.format,
            filename=default_filename(template.id, today),
            title=template.name,
            columns=template.columns,
        )

        if destination in LOCAL_DESTINATIONS:
            self._sink(artifact)
        else:
            self._logger.info(
                "simulated_send",
                destination=destination,
                filename=artifact.filename,
                size=len(artifact.content),
            )

        entry = self._history.add(
            destination=destination,
            template_name=template.name,
            record_count=len(selected),
            total_amount=total,
            status=ExportStatus.COMPLETED,
        )
        self._audit_logger.log(AuditEventBuilder.export_completed(
            entry.id, template.name, destination, len(selected), total
        ))
        return entry

    async def perform_export(
        self,
        expenses: Iterable[Expense],
        options: ExportOptions,
    ) -> ExportArtifact:
        """
        Ad-hoc export with user-chosen dates, categories and format.

        Inclusive date bounds, categories (empty means all), ascending by
        date, fixed column set. Without a filename the artifact is named
        `expenses-<YYYY-MM-DD>`. Not recorded in the history log.
        """
        selected = select_expenses(
            expenses,
            categories=options.categories or None,
            date_from=options.date_from,
            date_to=options.date_to,
            sort_by=SortKey.DATE,
            sort_order=SortOrder.ASC,
        )

        await self._sleep(self._quick_export_delay)

        artifact = self.build_artifact(
            selected,
            options.format,
            filename=options.filename or default_filename(DEFAULT_EXPORT_PREFIX, self._clock().date()),
            title=QUICK_EXPORT_TITLE,
        )
        self._sink(artifact)
        self._audit_logger.log(AuditEventBuilder.quick_export_completed(
            artifact.filename, options.format.value, artifact.record_count
        ))
        return artifact
