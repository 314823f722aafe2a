"""Layout serialization — JSON conversion."""

from __future__ import annotations

from lineplanner.pipeline.operations.models import Operation
from lineplanner.pipeline.operations.serialization import operation_to_dict

from .classify import machine_category
from .models import Fixture, FixtureKind, Lane, PlacedEntity, Vec3, FIXTURE_INDEX


def _vec(v: Vec3) -> dict:
    return {"x": round(v.x, 4), "y": round(v.y, 4), "z": round(v.z, 4)}


def entity_to_dict(e: PlacedEntity) -> dict:
    """Serialize one PlacedEntity to a JSON-safe dict.

    Machines carry their ``operation``; fixtures carry a ``fixture`` block
    instead, so consumers can never mistake one for a timed station.
    """
    d = {
        "id": e.id,
        "lane": e.lane.value,
        "section": e.section,
        "position": _vec(e.position),
        "rotation": _vec(e.rotation),
        "machine_index": e.sequence_index,
        "is_inspection": e.is_inspection,
        "is_trolley": e.is_trolley,
        "is_board": e.is_board,
    }
    if isinstance(e.source, Operation):
        d["operation"] = operation_to_dict(e.source)
        d["category"] = machine_category(e.source.machine_type)
    else:
        d["fixture"] = {"kind": e.source.kind.value, "label": e.source.label}
    return d


def layout_to_dict(entities: list[PlacedEntity]) -> list[dict]:
    """Serialize a full layout."""
    return [entity_to_dict(e) for e in entities]


def parse_layout(data: list[dict]) -> list[PlacedEntity]:
    """Parse a serialized layout back into PlacedEntity values."""
    entities = []
    for d in data:
        if "operation" in d:
            o = d["operation"]
            source: Operation | Fixture = Operation(
                op_no=o["op_no"],
                op_name=o["op_name"],
                machine_type=o["machine_type"],
                smv=o.get("smv"),
                section=o.get("section", ""),
            )
        else:
            f = d["fixture"]
            source = Fixture(kind=FixtureKind(f["kind"]), label=f["label"])
        entities.append(PlacedEntity(
            id=d["id"],
            source=source,
            lane=Lane(d["lane"]),
            position=Vec3(**d["position"]),
            rotation=Vec3(**d["rotation"]),
            section=d["section"],
            sequence_index=d.get("machine_index", FIXTURE_INDEX),
        ))
    return entities
