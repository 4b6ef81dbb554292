"""
Finance Tracker - Source Package

A small personal finance tracker: record income and expenses, see where
the money went, keep everything in a local key/value slot.

DESIGN PRINCIPLES:
1. Validation errors are data, never exceptions
2. Persistence problems never crash the app
3. Derived views are recomputed, never cached
4. Storage backend is swappable
"""

__version__ = "1.0.0"
