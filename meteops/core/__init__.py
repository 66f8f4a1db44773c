"""
Core domain models and pure functions for MeteOps.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    Alert, AlertStatus, Country, EventDates, ForecastProvider, Region,
    Severity, Stats, UserStats,
)
from .errors import AlertValidationError
from .intervals import is_active_on, start_of_day
from .severity import SEVERITY_ORDER, active_alerts_on, resolve_severities
from .stats import add_user_stats, aggregate_stats, empty_user_stats
from .store import AlertStore, filter_by_status, group_by_status

__all__ = [
    "Alert", "AlertStatus", "Country", "EventDates", "ForecastProvider", "Region",
    "Severity", "Stats", "UserStats", "AlertValidationError",
    "is_active_on", "start_of_day", "SEVERITY_ORDER", "active_alerts_on",
    "resolve_severities", "add_user_stats", "aggregate_stats", "empty_user_stats",
    "AlertStore", "filter_by_status", "group_by_status",
]
