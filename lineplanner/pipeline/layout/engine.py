"""Lane placer — deterministic section-by-section packing into four lanes."""

from __future__ import annotations

import logging
import math
import uuid

from lineplanner.pipeline.balancing.models import BalancedOperation
from lineplanner.pipeline.config import FLOOR_RULES, FloorRules
from lineplanner.pipeline.operations.models import Operation

from .classify import forces_front, is_buttoning, section_kind
from .models import (
    Facing, Fixture, FixtureKind, Lane, LaneCursors, PlacedEntity,
    SectionKind, Vec3, FIXTURE_INDEX, LANE_FACING, LANE_PAIRS,
    facing_yaw, lane_z,
)


log = logging.getLogger(__name__)

ASSEMBLY_LANES = (Lane.A, Lane.B, Lane.C)
BUTTONING_LANE = Lane.D


def _uid() -> str:
    return uuid.uuid4().hex[:12]


# ── Entity builders ────────────────────────────────────────────────


def _machine(
    op: Operation, lane: Lane, x: float, index: int, section: str,
    rules: FloorRules, *, facing: Facing | None = None,
) -> PlacedEntity:
    """Place one machine instance.

    Without an explicit *facing*, the lane's default applies unless the
    machine type is read from the front only (irons, presses, inspection).
    """
    if facing is None:
        facing = Facing.FRONT if forces_front(op.machine_type) else LANE_FACING[lane]
    log.debug("Placed %s #%d in lane %s at x=%.2f facing %s",
              op.op_no, index, lane.value, x, facing.value)
    return PlacedEntity(
        id=f"{op.op_no}-{index}-{_uid()}",
        source=op,
        lane=lane,
        position=Vec3(x, 0.0, lane_z(rules, lane)),
        rotation=Vec3(0.0, facing_yaw(rules, facing), 0.0),
        section=section,
        sequence_index=index,
    )


def _fixture(
    kind: FixtureKind, label: str, section: str, lane: Lane,
    position: Vec3, facing: Facing, rules: FloorRules, *, entity_id: str | None = None,
) -> PlacedEntity:
    return PlacedEntity(
        id=entity_id or f"{kind.value}-{label}-{_uid()}",
        source=Fixture(kind=kind, label=label),
        lane=lane,
        position=position,
        rotation=Vec3(0.0, facing_yaw(rules, facing), 0.0),
        section=section,
        sequence_index=FIXTURE_INDEX,
    )


def _board(section: str, x: float, z: float, rules: FloorRules) -> PlacedEntity:
    """Elevated section board; takes no lane width."""
    return _fixture(
        FixtureKind.BOARD, section, section,
        Lane.A if z < 0 else Lane.C,
        Vec3(x, rules.board_height, z),
        Facing.FRONT, rules,
    )


# ── Preparation sections (one lane pair) ───────────────────────────


def place_preparation_section(
    section: str,
    items: list[BalancedOperation],
    pair: tuple[Lane, Lane],
    cursors: LaneCursors,
    rules: FloorRules = FLOOR_RULES,
) -> tuple[list[PlacedEntity], LaneCursors]:
    """Place a parts-preparation section into one lane pair.

    Operations alternate between the pair's lanes, one whole run per
    operation.  The section opens with a board and closes with an
    inspection table and a trolley on the inner lane.

    Returns the placed entities and the updated cursors.
    """
    inner, outer = pair
    placed: list[PlacedEntity] = []

    start = cursors.furthest(pair) + rules.section_gap
    cursors = cursors.synced(pair, start)
    placed.append(_board(section, start, lane_z(rules, inner), rules))
    cursors = cursors.advanced(pair, rules.board_clearance)

    for i, item in enumerate(items):
        lane = pair[i % 2]
        x = cursors[lane]
        for k in range(item.machine_count):
            placed.append(_machine(item.operation, lane, x, k, section, rules))
            x += rules.machine_pitch
        cursors = cursors.set(lane, x)

    # ── Inspection table + trolley on the inner lane ──
    inner_z = lane_z(rules, inner)
    toward_outer = math.copysign(1.0, lane_z(rules, outer) - inner_z)
    inspect_x = cursors.furthest(pair) + rules.inspection_offset
    trolley_x = inspect_x + rules.trolley_offset_x

    placed.append(_fixture(
        FixtureKind.INSPECTION, "Inspection", section, inner,
        Vec3(inspect_x, 0.0, inner_z), Facing.FRONT, rules,
        entity_id=f"inspect-{section}",
    ))
    placed.append(_fixture(
        FixtureKind.TROLLEY, "Trolley", section, inner,
        Vec3(trolley_x, 0.0, inner_z + toward_outer * rules.trolley_offset_z),
        Facing.RIGHT, rules,
        entity_id=f"trolley-{section}",
    ))
    cursors = cursors.synced(pair, trolley_x + rules.fixture_clearance)

    log.info(
        "Section '%s' placed in lanes %s%s from x=%.2f: %d machines",
        section, inner.value, outer.value, start,
        sum(item.machine_count for item in items),
    )
    return placed, cursors


# ── Assembly section (all four lanes) ──────────────────────────────


def place_assembly_section(
    section: str,
    items: list[BalancedOperation],
    cursors: LaneCursors,
    rules: FloorRules = FLOOR_RULES,
) -> tuple[list[PlacedEntity], LaneCursors]:
    """Place the assembly section across all four lanes.

    Lanes A, B and C are three identical sub-lines that each build a
    complete garment, so an operation's machines are dealt round-robin
    across them, one row per three machines.  Buttoning runs
    sequentially in lane D.  Everything faces the front.
    """
    placed: list[PlacedEntity] = []

    start = cursors.furthest() + rules.section_gap
    cursors = cursors.synced(tuple(Lane), start)
    placed.append(_board(section, start, rules.assembly_board_z, rules))

    buttoning = [item for item in items if is_buttoning(item.operation)]
    main = [item for item in items if not is_buttoning(item.operation)]

    row_x = start
    for item in main:
        for k in range(item.machine_count):
            lane = ASSEMBLY_LANES[k % len(ASSEMBLY_LANES)]
            x = row_x + (k // len(ASSEMBLY_LANES)) * rules.machine_pitch
            placed.append(_machine(item.operation, lane, x, k, section, rules,
                                   facing=Facing.FRONT))
        rows = math.ceil(item.machine_count / len(ASSEMBLY_LANES))
        row_x += rows * rules.machine_pitch

    d_x = start
    for item in buttoning:
        for k in range(item.machine_count):
            placed.append(_machine(item.operation, BUTTONING_LANE, d_x, k, section, rules,
                                   facing=Facing.FRONT))
            d_x += rules.machine_pitch

    cursors = cursors.synced(tuple(Lane), max(row_x, d_x))

    log.info(
        "Assembly section '%s' placed from x=%.2f: %d main ops, %d buttoning ops",
        section, start, len(main), len(buttoning),
    )
    return placed, cursors


# ── Preparation → assembly transition ──────────────────────────────


def place_transition_fixtures(
    cursors: LaneCursors,
    rules: FloorRules = FLOOR_RULES,
) -> tuple[list[PlacedEntity], LaneCursors]:
    """Close parts preparation before assembly starts.

    Lanes A/B end with a supermarket cabinet, lanes C/D with a work
    table and chair.
    """
    placed: list[PlacedEntity] = []
    for kind, label, pair in (
        (FixtureKind.SUPERMARKET, "Supermarket", LANE_PAIRS[SectionKind.AB]),
        (FixtureKind.WORK_TABLE, "Table & Chair", LANE_PAIRS[SectionKind.CD]),
    ):
        inner, outer = pair
        x = cursors.furthest(pair) + rules.inspection_offset
        z = (lane_z(rules, inner) + lane_z(rules, outer)) / 2
        placed.append(_fixture(kind, label, label, inner, Vec3(x, 0.0, z),
                               Facing.FRONT, rules))
        cursors = cursors.synced(pair, x + rules.fixture_clearance)
    log.info("Transition fixtures placed before assembly")
    return placed, cursors


# ── Main placement function ───────────────────────────────────────


def place_sections(
    groups: dict[str, list[BalancedOperation]],
    rules: FloorRules = FLOOR_RULES,
) -> list[PlacedEntity]:
    """Place every grouped section, in order, into the four lanes.

    Parameters
    ----------
    groups : dict[str, list[BalancedOperation]]
        Section label -> balanced operations, in line order.
    rules : FloorRules
        Floor spacing policy (default ``FLOOR_RULES``).

    Returns
    -------
    list[PlacedEntity]
        Machines and fixtures; empty when there are no sections.
    """
    placed: list[PlacedEntity] = []
    cursors = LaneCursors()
    preparation_open = False

    for section, items in groups.items():
        kind = section_kind(section)

        if kind is SectionKind.ASSEMBLY:
            if rules.transition_fixtures and preparation_open:
                entities, cursors = place_transition_fixtures(cursors, rules)
                placed.extend(entities)
            preparation_open = False
            entities, cursors = place_assembly_section(section, items, cursors, rules)
        else:
            preparation_open = True
            entities, cursors = place_preparation_section(
                section, items, LANE_PAIRS[kind], cursors, rules)
        placed.extend(entities)

    return placed
