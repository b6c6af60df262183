"""
Diagnostic Progress Tracker.

Local document store for diagnostic progress, activity and report
requests, with derived dashboard metrics.
"""

__version__ = "1.0.0"
