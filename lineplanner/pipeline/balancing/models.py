"""Balancing output dataclasses and error types."""

from __future__ import annotations

from dataclasses import dataclass

from lineplanner.pipeline.operations.models import Operation


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class BalancedOperation:
    """An operation with the number of machines needed to meet takt."""

    operation: Operation
    machine_count: int


@dataclass(frozen=True)
class BalanceSummary:
    """Line-level figures for one balancing run."""

    takt_time: float            # minutes per unit
    total_smv: float            # minutes of work content per unit
    total_machines: int
    theoretical_machines: float  # total_smv / takt_time
    line_efficiency: float       # 0..1, work content over installed capacity


# ── Errors ─────────────────────────────────────────────────────────


class LinePlannerError(Exception):
    """Base class for all domain errors raised by the pipeline."""


class InvalidDemand(LinePlannerError):
    """Raised when the production target or working time is not a finite
    positive number, or when they ask for an unbounded machine count."""

    def __init__(
        self,
        target_output_per_day: float,
        working_minutes_per_day: float,
        reason: str = "must both be finite and > 0",
    ) -> None:
        self.target_output_per_day = target_output_per_day
        self.working_minutes_per_day = working_minutes_per_day
        super().__init__(
            f"Invalid demand: target output ({target_output_per_day}) and "
            f"working minutes ({working_minutes_per_day}) {reason}"
        )


class MalformedOperation(LinePlannerError):
    """Raised when the operation bulletin fails validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"{len(self.errors)} malformed operation field(s): " + "; ".join(self.errors)
        )
