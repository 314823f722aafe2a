"""Operation serialization — convert Operation values to JSON-safe dicts."""

from __future__ import annotations

from .models import Operation


def operation_to_dict(op: Operation) -> dict:
    """Convert an Operation to a JSON-serializable dict."""
    return {
        "op_no": op.op_no,
        "op_name": op.op_name,
        "machine_type": op.machine_type,
        "smv": op.smv,
        "section": op.section,
    }
