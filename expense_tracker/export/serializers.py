"""
Export Serializers

Turn a filtered list of expenses into CSV, JSON or a printable HTML
document. All three are plain functions of their inputs; the generation
date is passed in so output is reproducible.
"""

import csv
import io
import json
from datetime import date
from html import escape
from typing import Callable, Iterable, Optional, Sequence

from expense_tracker.engine.aggregation import total_amount
from expense_tracker.engine.formatting import (
    format_amount,
    format_currency,
    format_long_date,
    pluralize,
)
from expense_tracker.models.expense import Expense
from expense_tracker.models.export import DEFAULT_COLUMNS, ExportColumn, ExportFormat

CSV_CELLS: dict[ExportColumn, Callable[[Expense], str]] = {
    ExportColumn.DATE: lambda e: e.date.isoformat(),
    ExportColumn.CATEGORY: lambda e: e.category.value,
    ExportColumn.DESCRIPTION: lambda e: e.description,
    ExportColumn.AMOUNT: lambda e: format_amount(e.amount),
}


def to_csv(
    expenses: Iterable[Expense],
    columns: Sequence[ExportColumn] = DEFAULT_COLUMNS,
) -> str:
    """
    Comma-separated text with a header row.

    Fields containing a comma, quote or line break are quoted with inner
    quotes doubled. Amounts always carry two decimals.
    """
    columns = [ExportColumn(c) for c in columns]
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)

    writer.writerow([c.value for c in columns])
    for expense in expenses:
        writer.writerow([CSV_CELLS[c](expense) for c in columns])

    return buffer.getvalue().removesuffix("\n")


def to_json(expenses: Iterable[Expense]) -> str:
    """Array of {date, category, description, amount}, 2-space indented."""
    data = [
        {
            "date": e.date.isoformat(),
            "category": e.category.value,
            "description": e.description,
            "amount": float(e.amount),
        }
        for e in expenses
    ]
    return json.dumps(data, indent=2, ensure_ascii=False)


_PRINT_STYLES = """\
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:-apple-system,BlinkMacSystemFont,"Segoe UI",Helvetica,Arial,sans-serif;padding:40px;color:#1f2937}
h1{font-size:22px;margin-bottom:4px}
.subtitle{color:#6b7280;font-size:13px;margin-bottom:24px}
table{width:100%;border-collapse:collapse;font-size:13px}
th{text-align:left;padding:10px 12px;background:#f3f4f6;border-bottom:2px solid #e5e7eb;font-weight:600}
td{padding:9px 12px;border-bottom:1px solid #f3f4f6}
tr:nth-child(even) td{background:#f9fafb}
.amount{text-align:right;font-variant-numeric:tabular-nums}
.total{margin-top:16px;text-align:right;font-size:15px;font-weight:700}
@media print{body{padding:20px}}"""


def to_html(
    expenses: Iterable[Expense],
    title: str,
    columns: Sequence[ExportColumn] = DEFAULT_COLUMNS,
    generated_on: Optional[date] = None,
    currency_symbol: str = "$",
) -> str:
    """
    Self-contained printable document.

    Styles are inline and there are no external assets; the page opens
    the print dialog when loaded.
    """
    expenses = list(expenses)
    columns = [ExportColumn(c) for c in columns]
    generated_on = generated_on or date.today()
    total = format_currency(total_amount(expenses), currency_symbol)

    def cell(expense: Expense, column: ExportColumn) -> str:
        if column == ExportColumn.AMOUNT:
            return f'<td class="amount">{escape(format_currency(expense.amount, currency_symbol))}</td>'
        return f"<td>{escape(CSV_CELLS[column](expense))}</td>"

    header = "".join(
        f'<th class="amount">{c.value}</th>' if c == ExportColumn.AMOUNT else f"<th>{c.value}</th>"
        for c in columns
    )
    rows = "\n".join(
        "<tr>" + "".join(cell(e, c) for c in columns) + "</tr>"
        for e in expenses
    )

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>\n{_PRINT_STYLES}\n</style>\n</head>\n<body>\n"
        f"<h1>{escape(title)}</h1>\n"
        f'<p class="subtitle">{pluralize(len(expenses), "record")} &middot; '
        f"{escape(total)} total &middot; {format_long_date(generated_on)}</p>\n"
        f"<table>\n<thead><tr>{header}</tr></thead>\n<tbody>\n{rows}\n</tbody>\n</table>\n"
        f'<p class="total">Total: {escape(total)}</p>\n'
        "<script>window.onload=function(){window.print()}</script>\n"
        "</body>\n</html>\n"
    )


def serialize(
    expenses: Iterable[Expense],
    export_format: ExportFormat,
    title: str,
    columns: Sequence[ExportColumn] = DEFAULT_COLUMNS,
    generated_on: Optional[date] = None,
    currency_symbol: str = "$",
) -> str:
    """Dispatch to the serializer for `export_format`."""
    export_format = ExportFormat(export_format)
    if export_format == ExportFormat.CSV:
        return to_csv(expenses, columns)
    if export_format == ExportFormat.JSON:
        return to_json(expenses)
    return to_html(
        expenses,
        title=title,
        columns=columns,
        generated_on=generated_on,
        currency_symbol=currency_symbol,
    )
