"""Ledger-versus-aggregate reconciliation."""

from .consistency import ConsistencyChecker

__all__ = ["ConsistencyChecker"]
