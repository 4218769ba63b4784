"""Spend tracking for paid evidence lookups."""

from consensus_engine.budget.cost_tracker import CostSnapshot, CostTracker

__all__ = ["CostSnapshot", "CostTracker"]
