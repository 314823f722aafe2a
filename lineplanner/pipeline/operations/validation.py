"""Operation validation — check a bulletin before it is balanced."""

from __future__ import annotations

import math

from .models import Operation


def validate_operations(operations: list[Operation]) -> list[str]:
    """Validate an operation list. Returns error messages (empty = valid)."""
    errors: list[str] = []

    for i, op in enumerate(operations):
        if not isinstance(op, Operation):
            errors.append(f"Operation #{i}: expected Operation, got {type(op).__name__}")
            continue

        label = f"Operation #{i} ('{op.op_no}')" if op.op_no else f"Operation #{i}"

        # ── Required text fields ──
        if not isinstance(op.op_no, str) or not op.op_no.strip():
            errors.append(f"{label}: op_no is required")
        if not isinstance(op.machine_type, str) or not op.machine_type.strip():
            errors.append(f"{label}: machine_type is required")
        if op.section is not None and not isinstance(op.section, str):
            errors.append(f"{label}: section must be text, got {type(op.section).__name__}")

        # ── SMV: missing is allowed, otherwise a finite number >= 0 ──
        smv = op.smv
        if smv is None:
            continue
        if isinstance(smv, bool) or not isinstance(smv, (int, float)):
            errors.append(f"{label}: smv must be a number, got {smv!r}")
        elif not math.isfinite(smv):
            errors.append(f"{label}: smv must be finite, got {smv!r}")
        elif smv < 0:
            errors.append(f"{label}: smv must be >= 0, got {smv}")

    return errors
