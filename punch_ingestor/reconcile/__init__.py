"""Punch reconciliation against the persistent store."""

from .reconciler import PunchReconciler, PunchStore, ReconcileSummary

__all__ = ["PunchReconciler", "PunchStore", "ReconcileSummary"]
