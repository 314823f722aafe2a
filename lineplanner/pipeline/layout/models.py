"""Layout output dataclasses, lane state and lane lookups."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from lineplanner.pipeline.config import FloorRules
from lineplanner.pipeline.operations.models import Operation


class Lane(str, Enum):
    A = "A"     # left inner
    B = "B"     # left outer
    C = "C"     # right inner
    D = "D"     # right outer


class Facing(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class SectionKind(str, Enum):
    AB = "AB"
    CD = "CD"
    ASSEMBLY = "assembly"


class FixtureKind(str, Enum):
    BOARD = "board"
    INSPECTION = "inspection"
    TROLLEY = "trolley"
    SUPERMARKET = "supermarket"
    WORK_TABLE = "work_table"


# Lane pairs, inner lane first.
LANE_PAIRS: dict[SectionKind, tuple[Lane, Lane]] = {
    SectionKind.AB: (Lane.A, Lane.B),
    SectionKind.CD: (Lane.C, Lane.D),
}

# Paired lanes face each other across the aisle.
LANE_FACING: dict[Lane, Facing] = {
    Lane.A: Facing.LEFT,
    Lane.B: Facing.RIGHT,
    Lane.C: Facing.RIGHT,
    Lane.D: Facing.LEFT,
}

FIXTURE_INDEX = -1      # sequence index carried by every fixture


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Fixture:
    """A non-machine entity placed by policy (board, table, trolley...)."""

    kind: FixtureKind
    label: str


@dataclass(frozen=True)
class PlacedEntity:
    """A machine or fixture with a resolved floor position and yaw."""

    id: str
    source: Operation | Fixture
    lane: Lane
    position: Vec3
    rotation: Vec3      # only rotation.y (yaw) is ever non-zero
    section: str
    sequence_index: int = FIXTURE_INDEX

    @property
    def is_machine(self) -> bool:
        return isinstance(self.source, Operation)

    @property
    def fixture_kind(self) -> FixtureKind | None:
        return self.source.kind if isinstance(self.source, Fixture) else None

    @property
    def is_board(self) -> bool:
        return self.fixture_kind is FixtureKind.BOARD

    @property
    def is_inspection(self) -> bool:
        return self.fixture_kind is FixtureKind.INSPECTION

    @property
    def is_trolley(self) -> bool:
        return self.fixture_kind is FixtureKind.TROLLEY


# ── Lane state ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class LaneCursors:
    """Next free along-line offset for each lane.

    Immutable: every update returns a new value, so the placer threads
    the state explicitly from one section to the next.
    """

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0

    def __getitem__(self, lane: Lane) -> float:
        return getattr(self, lane.value.lower())

    def furthest(self, lanes: tuple[Lane, ...] = tuple(Lane)) -> float:
        return max(self[lane] for lane in lanes)

    def set(self, lane: Lane, x: float) -> LaneCursors:
        return replace(self, **{lane.value.lower(): x})

    def synced(self, lanes: tuple[Lane, ...], x: float) -> LaneCursors:
        """Move every lane in *lanes* to the same offset *x*."""
        return replace(self, **{lane.value.lower(): x for lane in lanes})

    def advanced(self, lanes: tuple[Lane, ...], dx: float) -> LaneCursors:
        return replace(self, **{lane.value.lower(): self[lane] + dx for lane in lanes})


# ── Lookups ────────────────────────────────────────────────────────


def lane_z(rules: FloorRules, lane: Lane) -> float:
    """Across-line offset of a lane."""
    return {
        Lane.A: rules.lane_a_z,
        Lane.B: rules.lane_b_z,
        Lane.C: rules.lane_c_z,
        Lane.D: rules.lane_d_z,
    }[lane]


def facing_yaw(rules: FloorRules, facing: Facing) -> float:
    """Yaw angle (radians) for a canonical facing direction."""
    return {
        Facing.FRONT: rules.yaw_front,
        Facing.BACK: rules.yaw_back,
        Facing.LEFT: rules.yaw_left,
        Facing.RIGHT: rules.yaw_right,
    }[facing]
