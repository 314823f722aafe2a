"""Layout — positions every balanced machine on the sewing-line floor.

Submodules:
  models        Output dataclasses, lane cursors, lane/facing lookups.
  classify      Ordered keyword tables (section kind, facing, category, footprint).
  grouping      Section grouping in first-seen order.
  engine        Lane placement (preparation pairs, assembly, transition fixtures).
  generator     One-call entry point: balance, group, place.
  checks        Collision and section-allotment reports.
  serialization JSON conversion (layout_to_dict, parse_layout).
"""

from .models import (
    Lane, Facing, SectionKind, FixtureKind, Vec3, Fixture, PlacedEntity,
    LaneCursors, FIXTURE_INDEX,
)
from .grouping import group_sections, UNKNOWN_SECTION
from .engine import place_sections
from .generator import generate_layout
from .checks import find_collisions, check_section_allotments
from .serialization import layout_to_dict, parse_layout

__all__ = [
    # Models
    "Lane", "Facing", "SectionKind", "FixtureKind", "Vec3", "Fixture",
    "PlacedEntity", "LaneCursors", "FIXTURE_INDEX",
    # Grouping / Engine / Generator
    "group_sections", "UNKNOWN_SECTION", "place_sections", "generate_layout",
    # Checks / Serialization
    "find_collisions", "check_section_allotments",
    "layout_to_dict", "parse_layout",
]
