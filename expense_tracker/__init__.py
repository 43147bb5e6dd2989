"""
Expense Tracker - Source Package

A small personal expense tracker: record expenses, filter them by
month, see the monthly total, delete mistakes.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth for a session
2. Invalid input is rejected, never silently corrected
3. Storage failures degrade gracefully, they never block the user
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
