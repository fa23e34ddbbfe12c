"""
Expense Tracker - Source Package

A single-user personal expense tracker: record expenses, aggregate them
into summaries and chart series, filter and sort the list, and export
the data through templates or ad-hoc exports.

DESIGN PRINCIPLES:
1. Aggregation and filtering are pure functions over a list of expenses
2. Storage is swappable (in-memory for tests, JSON files locally)
3. Every mutation round-trips the whole collection
4. Every mutation and export is logged as a structured event
5. Simulated delays and clocks are injected, never hard-coded
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
