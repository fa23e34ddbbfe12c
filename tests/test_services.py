"""
Tests for the expense, history, schedule, connection and share services.

All services run against InMemoryStorage with a fixed clock.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from conftest import FIXED_NOW
from expense_tracker.audit import AuditLogger
from expense_tracker.export import TemplateNotFoundError
from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.expense import Category, ExpenseInput
from expense_tracker.models.export import ExportStatus, ScheduleFrequency
from expense_tracker.services import (
    ExpenseNotFoundError,
    ExpenseService,
    ExpenseValidationError,
    ExportHistoryService,
    ScheduleService,
    ServiceConnectionService,
    ShareLinkService,
    UnknownServiceError,
    compute_next_run,
)
from expense_tracker.validation import ExpenseValidator


def form(**overrides) -> ExpenseInput:
    values = dict(amount="12.50", category="Food", description="Lunch", date="2024-03-10")
    values.update(overrides)
    return ExpenseInput(**values)


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def expense_service(storage, settings, clock, audit_logger):
    counter = iter(range(1, 1000))
    return ExpenseService(
        storage,
        validator=ExpenseValidator(settings),
        audit_logger=audit_logger,
        clock=clock,
        id_factory=lambda: f"id-{next(counter)}",
    )


class TestExpenseService:
    """Tests for adding, updating and deleting expenses."""

    def test_add_persists_validated_expense(self, expense_service, storage):
        expense = expense_service.add(form(amount="19.99", description=" Taxi "))
        assert expense.id == "id-1"
        assert expense.created_at == FIXED_NOW
        assert expense.description == "Taxi"
        assert storage.load_expenses() == [expense]

    def test_persisted_amount_equals_input_to_the_cent(self, expense_service, storage):
        for raw in ["0.01", "19.99", "1234.56", "999999.99", "7"]:
            expense_service.add(form(amount=raw))
            assert storage.load_expenses()[0].amount == Decimal(raw)

    def test_newest_first(self, expense_service):
        expense_service.add(form(description="First"))
        expense_service.add(form(description="Second"))
        assert [e.description for e in expense_service.list()] == ["Second", "First"]

    def test_add_rejects_invalid_form(self, expense_service, storage, audit_logger):
        with pytest.raises(ExpenseValidationError) as exc_info:
            expense_service.add(form(amount="0", description=""))
        assert set(exc_info.value.result.field_errors()) == {"amount", "description"}
        assert storage.load_expenses() == []
        assert audit_logger.last_event.event_type == AuditEventType.EXPENSE_REJECTED

    def test_update_keeps_id_and_created_at(self, expense_service, clock):
        original = expense_service.add(form())
        updated = expense_service.update(
            original.id,
            form(amount="30", category="Bills", description="Gas", date="2024-03-12"),
        )
        assert updated.id == original.id
        assert updated.created_at == original.created_at
        assert updated.category == Category.BILLS
        assert updated.date == date(2024, 3, 12)
        assert expense_service.get(original.id) == updated

    def test_update_logs_changed_fields(self, expense_service, audit_logger):
        original = expense_service.add(form())
        expense_service.update(original.id, form(description="Dinner"))
        assert audit_logger.last_event.details["changed_fields"] == ["description"]

    def test_update_unknown_id(self, expense_service):
        with pytest.raises(ExpenseNotFoundError):
            expense_service.update("missing", form())

    def test_update_invalid_form_leaves_record(self, expense_service):
        original = expense_service.add(form())
        with pytest.raises(ExpenseValidationError):
            expense_service.update(original.id, form(date=""))
        assert expense_service.get(original.id) == original

    def test_delete(self, expense_service):
        first = expense_service.add(form())
        second = expense_service.add(form())
        assert expense_service.delete(first.id) is True
        assert expense_service.list() == [second]

    def test_delete_unknown_id(self, expense_service):
        expense_service.add(form())
        assert expense_service.delete("missing") is False
        assert len(expense_service.list()) == 1

    def test_get_unknown_id(self, expense_service):
        with pytest.raises(ExpenseNotFoundError):
            expense_service.get("missing")


class TestExportHistoryService:
    """Tests for the capped history log."""

    def test_add_prepends(self, storage, clock):
        history = ExportHistoryService(storage, clock=clock)
        history.add("download", "Tax Report", 3, Decimal("10"))
        latest = history.add("email", "Monthly Summary", 1, Decimal("5"))
        entries = history.list()
        assert entries[0] == latest
        assert [e.template_name for e in entries] == ["Monthly Summary", "Tax Report"]
        assert latest.timestamp == FIXED_NOW
        assert latest.status == ExportStatus.COMPLETED
        assert len(latest.id) == 8

    def test_capped(self, storage, clock):
        history = ExportHistoryService(storage, limit=50, clock=clock)
        for index in range(55):
            history.add("download", f"Export {index}", 0, Decimal("0"))
        entries = history.list()
        assert len(entries) == 50
        assert entries[0].template_name == "Export 54"
        assert entries[-1].template_name == "Export 5"

    def test_clear(self, storage, clock, audit_logger):
        history = ExportHistoryService(storage, clock=clock, audit_logger=audit_logger)
        history.add("download", "Tax Report", 0, Decimal("0"))
        history.clear()
        assert history.list() == []
        assert audit_logger.last_event.event_type == AuditEventType.HISTORY_CLEARED


class TestSchedule:
    """Tests for the export schedule."""

    @pytest.mark.parametrize("frequency,today,expected", [
        (ScheduleFrequency.DAILY, date(2024, 2, 28), date(2024, 2, 29)),
        (ScheduleFrequency.WEEKLY, date(2024, 3, 15), date(2024, 3, 17)),
        (ScheduleFrequency.WEEKLY, date(2024, 3, 17), date(2024, 3, 24)),
        (ScheduleFrequency.WEEKLY, date(2024, 3, 18), date(2024, 3, 24)),
        (ScheduleFrequency.MONTHLY, date(2024, 3, 15), date(2024, 4, 1)),
        (ScheduleFrequency.MONTHLY, date(2024, 12, 31), date(2025, 1, 1)),
    ])
    def test_compute_next_run(self, frequency, today, expected):
        assert compute_next_run(frequency, today) == expected

    def test_no_schedule_by_default(self, storage, clock):
        assert ScheduleService(storage, clock=clock).get() is None

    def test_save_stamps_next_run(self, storage, clock):
        service = ScheduleService(storage, clock=clock)
        config = service.save(True, "monthly", "dropbox", "tax-report")
        assert config.next_run == date(2024, 4, 1)
        assert service.get() == config

    def test_save_rejects_unknown_template(self, storage, clock):
        service = ScheduleService(storage, clock=clock)
        with pytest.raises(TemplateNotFoundError):
            service.save(True, ScheduleFrequency.WEEKLY, "email", "nope")
        assert service.get() is None


class TestServiceConnections:
    """Tests for the cloud service toggles."""

    def test_defaults(self, storage):
        service = ServiceConnectionService(storage)
        connected = {s.id: s.connected for s in service.list()}
        assert connected["email"] is True
        assert connected["dropbox"] is False
        assert len(connected) == 6

    def test_toggle_persists(self, storage):
        service = ServiceConnectionService(storage)
        assert service.toggle("dropbox") is True
        assert service.toggle("email") is False
        reloaded = ServiceConnectionService(storage)
        assert reloaded.is_connected("dropbox") is True
        assert reloaded.is_connected("email") is False

    def test_unknown_service(self, storage):
        service = ServiceConnectionService(storage)
        with pytest.raises(UnknownServiceError):
            service.toggle("myspace")


class TestShareLinks:
    """Tests for simulated share links."""

    def test_expires_seven_days_after_creation(self, storage, clock):
        link = ShareLinkService(storage, clock=clock).create()
        assert link.expires_at - link.created_at == timedelta(days=7)
        assert link.created_at == FIXED_NOW
        assert link.access_count == 0
        assert link.url.startswith("https://expenses.app/shared/")

    def test_is_expired(self, storage, clock):
        link = ShareLinkService(storage, clock=clock).create()
        assert link.is_expired(FIXED_NOW) is False
        assert link.is_expired(datetime(2024, 3, 22, 12, 0, tzinfo=timezone.utc)) is True

    def test_newest_first_and_capped(self, storage, clock):
        service = ShareLinkService(storage, limit=10, clock=clock)
        created = [service.create() for _ in range(12)]
        links = service.list()
        assert len(links) == 10
        assert links[0].id == created[-1].id

    def test_revoke(self, storage, clock, audit_logger):
        service = ShareLinkService(storage, clock=clock, audit_logger=audit_logger)
        keep = service.create()
        drop = service.create()
        service.revoke(drop.id)
        assert [link.id for link in service.list()] == [keep.id]
        assert audit_logger.last_event.event_type == AuditEventType.SHARE_REVOKED

    def test_revoke_unknown_is_noop(self, storage, clock):
        service = ShareLinkService(storage, clock=clock)
        link = service.create()
        service.revoke("missing")
        assert service.list() == [link]
