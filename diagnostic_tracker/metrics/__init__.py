"""Derived dashboard metrics."""

from .dashboard_metrics import DashboardMetrics, MetricsSummary

__all__ = [
    'DashboardMetrics',
    'MetricsSummary',
]
