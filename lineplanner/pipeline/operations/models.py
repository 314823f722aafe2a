"""Operation bulletin dataclasses — the ingestion collaborator's output."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Operation:
    """One line of an operation bulletin.

    ``smv`` is the standard minute value (processing time in minutes).
    ``None`` means the bulletin carried no timing for the operation.
    """
    op_no: str
    op_name: str
    machine_type: str
    smv: float | None = 0.0
    section: str = ""
