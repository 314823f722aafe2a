"""Capacity planner — size machine counts per operation against takt time."""

from __future__ import annotations

import logging
import math

from lineplanner.pipeline.operations.models import Operation
from lineplanner.pipeline.operations.validation import validate_operations

from .models import BalancedOperation, BalanceSummary, InvalidDemand, MalformedOperation


log = logging.getLogger(__name__)


def takt_time(target_output_per_day: float, working_minutes_per_day: float) -> float:
    """Minutes available per unit: working time divided by required output.

    Raises
    ------
    InvalidDemand
        If either value is not a finite positive number.
    """
    _check_demand(target_output_per_day, working_minutes_per_day)
    return working_minutes_per_day / target_output_per_day


def plan(
    operations: list[Operation],
    target_output_per_day: float,
    working_minutes_per_day: float,
) -> list[BalancedOperation]:
    """Compute the number of machines each operation needs.

    An operation with processing time T needs ``ceil(T / takt)`` machines,
    i.e. ``ceil(T * target / working)``.  Operations without timing (zero
    or missing SMV) still get one station.

    Parameters
    ----------
    operations : list[Operation]
        The operation bulletin, in line order.
    target_output_per_day : float
        Required output in units per day.
    working_minutes_per_day : float
        Available working time in minutes per day.

    Returns
    -------
    list[BalancedOperation]
        One entry per input operation, in input order.

    Raises
    ------
    InvalidDemand
        If the target or the working time is not a finite positive number,
        or an operation would need an unbounded number of machines.
    MalformedOperation
        If any operation is missing a required field or has a bad SMV.
    """
    _check_demand(target_output_per_day, working_minutes_per_day)

    errors = validate_operations(operations)
    if errors:
        raise MalformedOperation(errors)

    balanced = [
        BalancedOperation(
            operation=op,
            machine_count=required_machines(
                op.smv, target_output_per_day, working_minutes_per_day),
        )
        for op in operations
    ]

    log.info(
        "Balanced %d operations to %d machines (takt %.3f min)",
        len(balanced),
        sum(b.machine_count for b in balanced),
        working_minutes_per_day / target_output_per_day,
    )
    return balanced


def required_machines(
    smv: float | None,
    target_output_per_day: float,
    working_minutes_per_day: float,
) -> int:
    """Machines needed for one operation; never fewer than one.

    Raises
    ------
    InvalidDemand
        If the demand makes the machine count overflow to infinity.
    """
    if not smv:
        return 1
    needed = smv * target_output_per_day / working_minutes_per_day
    if not math.isfinite(needed):
        raise InvalidDemand(
            target_output_per_day, working_minutes_per_day,
            reason=f"need an unbounded number of machines for SMV {smv}",
        )
    return max(1, math.ceil(needed))


def summarize(
    balanced: list[BalancedOperation],
    target_output_per_day: float,
    working_minutes_per_day: float,
) -> BalanceSummary:
    """Line-level balance figures for a planned bulletin."""
    takt = takt_time(target_output_per_day, working_minutes_per_day)
    total_smv = sum(b.operation.smv or 0.0 for b in balanced)
    total_machines = sum(b.machine_count for b in balanced)
    efficiency = total_smv / (total_machines * takt) if total_machines else 0.0
    return BalanceSummary(
        takt_time=takt,
        total_smv=total_smv,
        total_machines=total_machines,
        theoretical_machines=total_smv / takt,
        line_efficiency=efficiency,
    )


def _check_demand(target_output_per_day: float, working_minutes_per_day: float) -> None:
    # NaN fails every comparison, so it is rejected here too
    if not (target_output_per_day > 0 and working_minutes_per_day > 0
            and math.isfinite(target_output_per_day)
            and math.isfinite(working_minutes_per_day)):
        raise InvalidDemand(target_output_per_day, working_minutes_per_day)
    if not working_minutes_per_day / target_output_per_day > 0:
        raise InvalidDemand(
            target_output_per_day, working_minutes_per_day,
            reason="give a takt time too small to represent",
        )
