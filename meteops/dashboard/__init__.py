"""
Dashboard state and handlers for MeteOps.

This module contains the controller that owns the dashboard state
and coordinates the alert store, reference data and AI suggestions.
"""
from .controller import AlertForm, DashboardController, DashboardSnapshot, DashboardState
from .actions import suggest_justification_action

__all__ = ["AlertForm", "DashboardController", "DashboardSnapshot", "DashboardState", "suggest_justification_action"]
