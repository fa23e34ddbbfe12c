"""
Export schedule configuration.

The schedule is only stored and displayed; nothing in the package runs
exports on it.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.export.templates import get_template
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import utc_now
from expense_tracker.models.export import ScheduleConfig, ScheduleFrequency
from expense_tracker.services.storage import ExpenseStorageInterface


def compute_next_run(frequency: ScheduleFrequency, today: date) -> date:
    """
    Next run date for a frequency.

    daily   tomorrow
    weekly  the coming Sunday (a full week ahead when today is Sunday)
    monthly the first of next month
    """
    frequency = ScheduleFrequency(frequency)

    if frequency == ScheduleFrequency.DAILY:
        return today + timedelta(days=1)

    if frequency == ScheduleFrequency.WEEKLY:
        # isoweekday: Monday=1 .. Sunday=7
        return today + timedelta(days=7 - today.isoweekday() % 7)

    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


class ScheduleService:
    def __init__(
        self,
        storage: ExpenseStorageInterface,
        clock: Callable[[], datetime] = utc_now,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._clock = clock
        self._audit_logger = audit_logger or AuditLogger()

    def get(self) -> Optional[ScheduleConfig]:
        return self._storage.load_schedule()

    def save(
        self,
        enabled: bool,
        frequency: ScheduleFrequency,
        destination: str,
        template_id: str,
    ) -> ScheduleConfig:
        """
        Replace the stored schedule, stamping the next run date.

        Raises:
            TemplateNotFoundError: If template_id is not a built-in template
        """
        get_template(template_id)
        frequency = ScheduleFrequency(frequency)
        config = ScheduleConfig(
            enabled=enabled,
            frequency=frequency,
            destination=destination,
            template=template_id,
            next_run=compute_next_run(frequency, self._clock().date()),
        )
        self._storage.save_schedule(config)
        self._audit_logger.log(
            AuditEventBuilder.schedule_saved(enabled, frequency.value, destination)
        )
        return config
