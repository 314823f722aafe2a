"""Balancing serialization — JSON conversion."""

from __future__ import annotations

from lineplanner.pipeline.operations.serialization import operation_to_dict

from .models import BalancedOperation, BalanceSummary


def balanced_to_dict(balanced: list[BalancedOperation]) -> list[dict]:
    """Serialize balanced operations to JSON-safe dicts."""
    return [
        {
            "operation": operation_to_dict(b.operation),
            "machine_count": b.machine_count,
        }
        for b in balanced
    ]


def summary_to_dict(summary: BalanceSummary) -> dict:
    """Serialize a BalanceSummary, rounding for display."""
    return {
        "takt_time": round(summary.takt_time, 4),
        "total_smv": round(summary.total_smv, 4),
        "total_machines": summary.total_machines,
        "theoretical_machines": round(summary.theoretical_machines, 2),
        "line_efficiency": round(summary.line_efficiency, 4),
    }
