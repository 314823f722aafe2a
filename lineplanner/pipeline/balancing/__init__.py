"""Balancing — machine counts per operation from the production target.

Submodules:
  models        Output dataclasses and error types.
  engine        Takt time, per-operation machine counts, line summary.
  serialization JSON conversion (balanced_to_dict, summary_to_dict).
"""

from .models import (
    BalancedOperation, BalanceSummary,
    LinePlannerError, InvalidDemand, MalformedOperation,
)
from .engine import plan, takt_time, required_machines, summarize
from .serialization import balanced_to_dict, summary_to_dict

__all__ = [
    # Models
    "BalancedOperation", "BalanceSummary",
    "LinePlannerError", "InvalidDemand", "MalformedOperation",
    # Engine
    "plan", "takt_time", "required_machines", "summarize",
    # Serialization
    "balanced_to_dict", "summary_to_dict",
]
