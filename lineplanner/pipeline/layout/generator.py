"""Layout generator — balance, group, place in one call."""

from __future__ import annotations

from lineplanner.pipeline.balancing.engine import plan
from lineplanner.pipeline.config import FLOOR_RULES, FloorRules
from lineplanner.pipeline.operations.models import Operation

from .engine import place_sections
from .grouping import group_sections
from .models import PlacedEntity


def generate_layout(
    operations: list[Operation],
    target_output_per_day: float,
    working_minutes_per_day: float,
    *,
    rules: FloorRules = FLOOR_RULES,
) -> list[PlacedEntity]:
    """Produce the full floor layout for an operation bulletin.

    Raises ``InvalidDemand`` or ``MalformedOperation`` before anything is
    placed; there is never a partial layout.
    """
    balanced = plan(operations, target_output_per_day, working_minutes_per_day)
    return place_sections(group_sections(balanced), rules)
