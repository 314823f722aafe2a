"""Shared floor constants for the layout pipeline.

These values describe the physical floor of a sewing line: where the four
lanes sit across the floor, how far apart machines stand along a lane,
and how much room the fixtures between sections take.  Both the **placer**
(which assigns coordinates) and the **checks** (which report collisions
and section overruns) read their spacing from this single source of truth.

All distances are in metres, all angles in radians.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class FloorRules:
    """Floor topology and spacing policy for one sewing line."""

    # ── Lane across-line offsets (z) ───────────────────────────────
    lane_a_z: float = -1.2
    """Left inner lane."""
    lane_b_z: float = -2.8
    """Left outer lane."""
    lane_c_z: float = 1.2
    """Right inner lane."""
    lane_d_z: float = 2.8
    """Right outer lane."""

    # ── Along-line spacing (x) ─────────────────────────────────────
    machine_pitch: float = 2.0
    """Distance between consecutive machines in one lane."""

    section_gap: float = 2.0
    """Empty floor left between the end of one section and the next."""

    board_clearance: float = 1.5
    """Room kept free after a section board before the first machine."""

    board_height: float = 2.5
    """Section boards hang above the line."""

    inspection_offset: float = 1.0
    """Distance from the last machine slot to the inspection table."""

    trolley_offset_x: float = 3.5
    """Distance along the line from the inspection table to the trolley."""

    trolley_offset_z: float = 0.5
    """Across-line shift of the trolley from the inner lane, toward the
    outer lane."""

    fixture_clearance: float = 1.0
    """Room kept free after the last fixture of a section."""

    assembly_board_z: float = 0.0
    """The assembly board sits on the centre aisle."""

    # ── Facing yaw angles ──────────────────────────────────────────
    yaw_front: float = -math.pi / 2     # -X
    yaw_back: float = math.pi / 2       # +X
    yaw_left: float = math.pi           # -Z
    yaw_right: float = 0.0              # +Z

    # ── Optional policy ────────────────────────────────────────────
    transition_fixtures: bool = False
    """Place a supermarket cabinet (lanes A/B) and a work table with chair
    (lanes C/D) between the last preparation section and assembly."""


# Module-level singleton, importable everywhere.
FLOOR_RULES = FloorRules()
