"""
Export Pipeline Package

Templates, date-range resolution and serializers. The executor lives in
expense_tracker.export.executor because it depends on the services package.
"""

from expense_tracker.export.serializers import serialize, to_csv, to_html, to_json
from expense_tracker.export.templates import (
    EXPORT_TEMPLATES,
    TemplateNotFoundError,
    apply_template,
    get_template,
    resolve_date_range,
)

__all__ = [
    "EXPORT_TEMPLATES",
    "TemplateNotFoundError",
    "apply_template",
    "get_template",
    "resolve_date_range",
    "serialize",
    "to_csv",
    "to_html",
    "to_json",
]
