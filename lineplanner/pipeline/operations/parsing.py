"""Operation parsing — convert raw dicts/JSON into Operation values."""

from __future__ import annotations

import re

from .models import Operation


_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_operations(data: list[dict]) -> list[Operation]:
    """Parse a raw list of dicts (from JSON / request body) into Operations.

    Required fields are not enforced here; missing ones come through as
    empty strings so that ``validate_operations`` can report all of them
    at once.
    """
    return [
        Operation(
            op_no=_text(o.get("op_no")),
            op_name=_text(o.get("op_name")),
            machine_type=_text(o.get("machine_type")),
            smv=_parse_smv(o.get("smv")),
            section=_text(o.get("section")),
        )
        for o in data
    ]


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_smv(value) -> float | None:
    """Coerce a bulletin SMV cell to minutes.

    Numbers pass through.  Strings such as ``"1.25 min"`` are read up to
    their first number, keeping a leading minus so the validator can
    reject negative times.  Anything unreadable becomes ``None`` (no timing).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER.search(str(value))
    return float(match.group()) if match else None
