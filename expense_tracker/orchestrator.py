"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the entry points
a rendering layer calls:
1. Dashboard (stored expenses → summary cards + chart series)
2. Expense list (stored expenses → filtered/sorted view)
3. Exports (template or ad-hoc → artifact → history)

DESIGN DECISION: The orchestrator owns no logic of its own beyond wiring.
Aggregation and filtering stay pure functions; services own storage
round-trips; the executor owns export side effects.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import AppSettings, get_settings
from expense_tracker.engine import (
    category_totals,
    daily_totals,
    filter_expenses,
    monthly_totals,
    spending_summary,
)
from expense_tracker.export.executor import ArtifactSink, DirectorySink, ExportExecutor, Sleep
from expense_tracker.export.templates import get_template
from expense_tracker.models.expense import (
    CategoryTotal,
    DailyTotal,
    Expense,
    FilterCriteria,
    MonthlyTotal,
    SpendingSummary,
    utc_now,
)
from expense_tracker.models.export import ExportArtifact, ExportHistoryEntry, ExportOptions
from expense_tracker.services import (
    ExpenseService,
    ExpenseStorageInterface,
    ExportHistoryService,
    InMemoryStorage,
    JsonFileStorage,
    ScheduleService,
    ServiceConnectionService,
    ShareLinkService,
)
from expense_tracker.validation import ExpenseValidator


class Dashboard(BaseModel):
    """Everything the dashboard page renders."""

    summary: SpendingSummary
    by_category: list[CategoryTotal]
    daily: list[DailyTotal]
    monthly: list[MonthlyTotal]


@dataclass
class ExpenseTracker:
    """Wired application components."""

    settings: AppSettings
    storage: ExpenseStorageInterface
    expenses: ExpenseService
    history: ExportHistoryService
    schedule: ScheduleService
    connections: ServiceConnectionService
    shares: ShareLinkService
    exporter: ExportExecutor
    clock: Callable[[], datetime] = utc_now

    def dashboard(self) -> Dashboard:
        """Summary cards and chart series for the stored expenses."""
        expenses = self.expenses.list()
        today = self.clock().date()
        return Dashboard(
            summary=spending_summary(expenses, today=today),
            by_category=category_totals(expenses),
            daily=daily_totals(expenses, self.settings.daily_window_days, today=today),
            monthly=monthly_totals(expenses),
        )

    def list_expenses(self, criteria: Optional[FilterCriteria] = None) -> list[Expense]:
        """Stored expenses through the interactive filter."""
        return filter_expenses(self.expenses.list(), criteria or FilterCriteria())

    async def export_template(self, template_id: str, destination: str) -> ExportHistoryEntry:
        """Run a built-in template export against the stored expenses."""
        template = get_template(template_id)
        return await self.exporter.execute_export(self.expenses.list(), template, destination)

    async def export_expenses(self, options: ExportOptions) -> ExportArtifact:
        """Ad-hoc export of the stored expenses."""
        return await self.exporter.perform_export(self.expenses.list(), options)


def create_app_components(
    settings: Optional[AppSettings] = None,
    storage: Optional[ExpenseStorageInterface] = None,
    sink: Optional[ArtifactSink] = None,
    sleep: Sleep = asyncio.sleep,
    clock: Callable[[], datetime] = utc_now,
    setup_logging: bool = True,
) -> ExpenseTracker:
    """
    Factory function to create all application components.

    Args:
        settings: Application settings; loaded from the environment if omitted
        storage: Storage backend; chosen by settings.storage_backend if omitted
        sink: Receiver of exported artifacts; writes into settings.export_dir
              if omitted
        sleep: Delay used by simulated exports (pass a no-op in tests)
        clock: Source of the current time
        setup_logging: Configure structlog from settings

    Returns:
        The wired ExpenseTracker
    """
    settings = settings or get_settings().app

    if setup_logging:
        configure_logging(settings.log_level, settings.json_logs)

    audit_logger = AuditLogger()

    if storage is None:
        if settings.storage_backend == "memory":
            storage = InMemoryStorage(audit_logger=audit_logger)
        else:
            storage = JsonFileStorage(settings.data_dir, audit_logger=audit_logger)

    history = ExportHistoryService(
        storage,
        limit=settings.history_limit,
        clock=clock,
        audit_logger=audit_logger,
    )

    return ExpenseTracker(
        settings=settings,
        storage=storage,
        expenses=ExpenseService(
            storage,
            validator=ExpenseValidator(settings),
            audit_logger=audit_logger,
            clock=clock,
        ),
        history=history,
        schedule=ScheduleService(storage, clock=clock, audit_logger=audit_logger),
        connections=ServiceConnectionService(storage, audit_logger=audit_logger),
        shares=ShareLinkService(
            storage,
            base_url=settings.share_base_url,
            expiry_days=settings.share_expiry_days,
            limit=settings.share_limit,
            clock=clock,
            audit_logger=audit_logger,
        ),
        exporter=ExportExecutor(
            history,
            sink=sink or DirectorySink(settings.export_dir),
            sleep=sleep,
            clock=clock,
            export_delay=settings.export_delay_seconds,
            quick_export_delay=settings.quick_export_delay_seconds,
            currency_symbol=settings.currency_symbol,
            audit_logger=audit_logger,
        ),
        clock=clock,
    )
