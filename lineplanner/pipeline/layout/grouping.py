"""Section grouping — bucket balanced operations by garment section."""

from __future__ import annotations

from lineplanner.pipeline.balancing.models import BalancedOperation


UNKNOWN_SECTION = "Unknown"


def group_sections(
    balanced: list[BalancedOperation],
) -> dict[str, list[BalancedOperation]]:
    """Group operations by section label, in first-seen order.

    Labels keep their case but lose surrounding whitespace; operations
    without a section go to ``UNKNOWN_SECTION``.
    """
    groups: dict[str, list[BalancedOperation]] = {}
    for item in balanced:
        section = (item.operation.section or "").strip() or UNKNOWN_SECTION
        groups.setdefault(section, []).append(item)
    return groups
