"""
Tests for the export executor.

Async entry points are driven with asyncio.run; the injected sleep records
the simulated delay instead of waiting.
"""

import asyncio
import json
from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.export import get_template
from expense_tracker.export.executor import DirectorySink, ExportExecutor, default_filename
from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.expense import Category
from expense_tracker.models.export import ExportFormat, ExportOptions, ExportStatus
from expense_tracker.services import ExportHistoryService


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def history(storage, clock):
    return ExportHistoryService(storage, clock=clock)


@pytest.fixture
def executor(history, sink, sleep, clock, audit_logger):
    return ExportExecutor(
        history,
        sink=sink,
        sleep=sleep,
        clock=clock,
        export_delay=1.2,
        quick_export_delay=0.6,
        audit_logger=audit_logger,
    )


class TestExecuteExport:
    """Tests for template exports."""

    def test_records_completed_history_entry(self, executor, history, sample_expenses, sleep):
        entry = asyncio.run(
            executor.execute_export(sample_expenses, get_template("monthly-summary"), "download")
        )
        assert entry.status == ExportStatus.COMPLETED
        assert entry.template_name == "Monthly Summary"
        assert entry.record_count == 3
        assert entry.total_amount == Decimal("174.99")
        assert history.list() == [entry]
        assert sleep.calls == [1.2]

    def test_download_goes_to_sink(self, executor, sample_expenses, sink):
        asyncio.run(executor.execute_export(sample_expenses, get_template("bills-only"), "download"))
        [artifact] = sink.artifacts
        assert artifact.filename == "bills-only-2024-03-15.csv"
        assert artifact.content.splitlines() == [
            "Date,Description,Amount",
            "2024-01-06,Electricity bill,40.00",
            "2024-03-15,Internet,60.00",
        ]

    def test_pdf_template_produces_printable_document(self, executor, sample_expenses, sink):
        asyncio.run(executor.execute_export(sample_expenses, get_template("tax-report"), "email"))
        [artifact] = sink.artifacts
        assert artifact.filename == "tax-report-2024-03-15.html"
        assert artifact.media_type.startswith("text/html")
        assert "<title>Tax Report</title>" in artifact.content

    def test_other_destinations_are_simulated(self, executor, history, sample_expenses, sink):
        entry = asyncio.run(
            executor.execute_export(sample_expenses, get_template("category-analysis"), "dropbox")
        )
        assert sink.artifacts == []
        assert entry.destination == "dropbox"
        assert history.list()[0].destination == "dropbox"

    def test_empty_selection_still_completes(self, executor):
        entry = asyncio.run(executor.execute_export([], get_template("tax-report"), "download"))
        assert entry.record_count == 0
        assert entry.total_amount == Decimal("0")

    def test_audited(self, executor, sample_expenses, audit_logger):
        entry = asyncio.run(
            executor.execute_export(sample_expenses, get_template("tax-report"), "download")
        )
        assert audit_logger.last_event.event_type == AuditEventType.EXPORT_COMPLETED
        assert audit_logger.last_event.entity_id == entry.id


class TestPerformExport:
    """Tests for ad-hoc exports from the export dialog."""

    def test_filters_and_sorts(self, executor, sample_expenses, sink, sleep):
        options = ExportOptions(
            format=ExportFormat.JSON,
            filename="expenses-2024-03-15",
            date_from="2024-01-06",
            date_to="2024-03-14",
            categories=[Category.BILLS, Category.FOOD, Category.SHOPPING],
        )
        artifact = asyncio.run(executor.perform_export(list(reversed(sample_expenses)), options))
        data = json.loads(artifact.content)
        assert [row["description"] for row in data] == ["Electricity bill", "Winter jacket", "Pizza night"]
        assert artifact.filename == "expenses-2024-03-15.json"
        assert artifact.record_count == 3
        assert sink.artifacts == [artifact]
        assert sleep.calls == [0.6]

    def test_empty_categories_mean_all(self, executor, sample_expenses):
        artifact = asyncio.run(
            executor.perform_export(sample_expenses, ExportOptions(filename="all"))
        )
        assert artifact.record_count == 6
        assert artifact.content.startswith("Date,Category,Description,Amount\n")

    def test_default_filename_uses_today(self, executor, sample_expenses, sink):
        artifact = asyncio.run(
            executor.perform_export(sample_expenses, ExportOptions(format="csv"))
        )
        assert artifact.filename == "expenses-2024-03-15.csv"
        assert sink.artifacts == [artifact]

    def test_blank_filename_uses_default(self, executor, sample_expenses):
        artifact = asyncio.run(
            executor.perform_export(sample_expenses, ExportOptions(format="json", filename="  "))
        )
        assert artifact.filename == "expenses-2024-03-15.json"

    def test_not_recorded_in_history(self, executor, history, sample_expenses):
        asyncio.run(executor.perform_export(sample_expenses, ExportOptions(filename="x")))
        assert history.list() == []

    def test_pdf_title(self, executor, sample_expenses):
        artifact = asyncio.run(
            executor.perform_export(sample_expenses, ExportOptions(format="pdf", filename="report"))
        )
        assert "<h1>Expense Report</h1>" in artifact.content


class TestSinks:
    """Tests for DirectorySink and filenames."""

    def test_directory_sink_writes_file(self, executor, tmp_path):
        sink = DirectorySink(tmp_path / "exports")
        artifact = executor.build_artifact([], ExportFormat.CSV, "empty", title="Empty")
        sink(artifact)
        assert (tmp_path / "exports" / "empty.csv").read_text(encoding="utf-8") == (
            "Date,Category,Description,Amount"
        )

    def test_default_filename(self, clock):
        assert default_filename("expenses", clock().date()) == "expenses-2024-03-15"
