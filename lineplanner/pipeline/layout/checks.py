"""Read-only layout checks — footprint collisions and section allotments.

Nothing here moves an entity.  Both checks return human-readable problem
messages (empty = clean), in the same style as the operation validator.
"""

from __future__ import annotations

import math
from collections import defaultdict

from shapely.geometry import Polygon, box as shapely_box

from .classify import FT_TO_M, machine_footprint
from .models import PlacedEntity


# ── Footprint collisions ───────────────────────────────────────────

OVERLAP_TOLERANCE_M2 = 1e-6


def footprint_box(entity: PlacedEntity) -> Polygon:
    """Axis-aligned floor footprint of a machine, in (x, z).

    A station facing left or right (across the aisle) has its work table
    running along the line; facing front or back turns it across.
    """
    fp = machine_footprint(entity.source.machine_type)
    yaw = entity.rotation.y
    if abs(math.sin(yaw)) > 0.5:
        dx, dz = fp.width, fp.length
    else:
        dx, dz = fp.length, fp.width
    x, z = entity.position.x, entity.position.z
    return shapely_box(x - dx / 2, z - dz / 2, x + dx / 2, z + dz / 2)


def find_collisions(entities: list[PlacedEntity]) -> list[str]:
    """Report machines sharing a lane slot or overlapping on the floor."""
    errors: list[str] = []
    machines = [e for e in entities if e.is_machine]

    # ── Lane slot uniqueness ──
    slots: dict[tuple[str, float], str] = {}
    for m in machines:
        key = (m.lane.value, round(m.position.x, 6))
        if key in slots:
            errors.append(
                f"'{m.id}' and '{slots[key]}' share lane {key[0]} at x={key[1]:.2f}"
            )
        else:
            slots[key] = m.id

    # ── Footprint overlap ──
    boxes = [footprint_box(m) for m in machines]
    for i in range(len(machines)):
        for j in range(i + 1, len(machines)):
            if not boxes[i].intersects(boxes[j]):
                continue
            area = boxes[i].intersection(boxes[j]).area
            if area > OVERLAP_TOLERANCE_M2:
                errors.append(
                    f"'{machines[i].id}' and '{machines[j].id}' footprints "
                    f"overlap by {area:.3f} m²"
                )

    return errors


# ── Section allotments ─────────────────────────────────────────────

# Along-line floor length allotted to each section, in feet.
SECTION_ALLOTMENTS_FT: dict[str, dict[str, float]] = {
    "DEFAULT": {
        "cuff": 34.34,
        "sleeve": 25.0,
        "back": 43.6927,
        "collar": 62.0,
        "front": 43.8055,
        "assembly": 56.03,
    },
    "LINE 6": {
        "cuff": 30.9498,
        "sleeve": 24.5510,
        "collar": 56.7096,
    },
}


def section_allotment(line_no: str, section: str) -> float | None:
    """Allotted along-line length in metres, or None if the section has none.

    Line 6 has its own table; sections it lacks use the default line.
    """
    line_key = "LINE 6" if "LINE 6" in (line_no or "").upper() else "DEFAULT"
    key = section.strip().lower()
    length_ft = SECTION_ALLOTMENTS_FT[line_key].get(key)
    if length_ft is None:
        length_ft = SECTION_ALLOTMENTS_FT["DEFAULT"].get(key)
    return length_ft * FT_TO_M if length_ft is not None else None


def section_extents(entities: list[PlacedEntity]) -> dict[str, float]:
    """Along-line length spanned by each section's entities, first-seen order."""
    xs: dict[str, list[float]] = defaultdict(list)
    for e in entities:
        xs[e.section].append(e.position.x)
    return {section: max(v) - min(v) for section, v in xs.items()}


def check_section_allotments(entities: list[PlacedEntity], line_no: str = "") -> list[str]:
    """Report sections that run longer than their floor allotment."""
    errors: list[str] = []
    for section, extent in section_extents(entities).items():
        allotted = section_allotment(line_no, section)
        if allotted is None:
            continue
        if extent > allotted + 1e-9:
            errors.append(
                f"Section '{section}' spans {extent:.2f} m but only "
                f"{allotted:.2f} m is allotted"
            )
    return errors
