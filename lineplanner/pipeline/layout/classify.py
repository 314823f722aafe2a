"""Keyword classification tables for sections and machine types.

Every table is an ordered tuple of ``KeywordRule``.  Rules are evaluated
top to bottom; the first rule with a keyword that is a case-insensitive
substring of the text decides the outcome.  Unmatched text falls back to
the table's default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from lineplanner.pipeline.operations.models import Operation

from .models import SectionKind


T = TypeVar("T")


@dataclass(frozen=True)
class KeywordRule(Generic[T]):
    keywords: tuple[str, ...]
    outcome: T

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords)


def classify(text: str, rules: tuple[KeywordRule[T], ...], default: T) -> T:
    """Return the outcome of the first matching rule, else *default*."""
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.outcome
    return default


# ── Sections ───────────────────────────────────────────────────────

SECTION_RULES: tuple[KeywordRule[SectionKind], ...] = (
    KeywordRule(("assembly",), SectionKind.ASSEMBLY),
    KeywordRule(("collar", "front"), SectionKind.CD),
    KeywordRule(("cuff", "sleeve", "back"), SectionKind.AB),
)


def section_kind(section: str) -> SectionKind:
    return classify(section, SECTION_RULES, SectionKind.AB)


# ── Machine behaviour ──────────────────────────────────────────────

# Stations read from one side only always face the front of the floor.
FRONT_FACING_RULES: tuple[KeywordRule[bool], ...] = (
    KeywordRule(("iron", "press", "inspection"), True),
)

BUTTONING_RULES: tuple[KeywordRule[bool], ...] = (
    KeywordRule(("button",), True),
)


def forces_front(machine_type: str) -> bool:
    return classify(machine_type, FRONT_FACING_RULES, False)


def is_buttoning(op: Operation) -> bool:
    """Buttoning ops go to lane D during assembly."""
    return (classify(op.machine_type, BUTTONING_RULES, False)
            or classify(op.op_name, BUTTONING_RULES, False))


# ── Machine category (renderer model / colour) ─────────────────────

CATEGORY_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("snls", "singleneedle", "lockstitch"), "snls"),
    KeywordRule(("snec", "overlock", "edge"), "snec"),
    KeywordRule(("iron", "press", "fusing"), "iron"),
    KeywordRule(("button", "bhole"), "button"),
    KeywordRule(("bartack",), "bartack"),
    KeywordRule(("helper", "table"), "helper"),
    KeywordRule(("special", "contour", "turning", "pointing", "notch", "wrapping"), "special"),
)

_SEPARATORS = re.compile(r"[\s_\-./]")


def machine_category(machine_type: str) -> str:
    """Category of a machine type, matched on the separator-free name."""
    normalized = _SEPARATORS.sub("", (machine_type or "").lower())
    return classify(normalized, CATEGORY_RULES, "default")


# ── Machine footprints ─────────────────────────────────────────────

FT_TO_M = 0.3048


@dataclass(frozen=True)
class Footprint:
    """Floor footprint in metres.  ``length`` runs along the work table."""
    length: float
    width: float


_STITCHING = Footprint(4 * FT_TO_M, 2.5 * FT_TO_M)

FOOTPRINT_RULES: tuple[KeywordRule[Footprint], ...] = (
    KeywordRule(("snls", "dnls", "overlock", "snec", "bartack"), _STITCHING),
    KeywordRule(("button hole", "button"), _STITCHING),
    KeywordRule(("notch",), _STITCHING),
    KeywordRule(("foa", "feed off"), Footprint(4.5 * FT_TO_M, 2.5 * FT_TO_M)),
    KeywordRule(("turning", "pointing"), Footprint(4.0 * FT_TO_M, 3.0 * FT_TO_M)),
    KeywordRule(("contour",), Footprint(4.5 * FT_TO_M, 3.0 * FT_TO_M)),
    KeywordRule(("iron", "press"), Footprint(5 * FT_TO_M, 3.5 * FT_TO_M)),
    KeywordRule(("inspection",), Footprint(6 * FT_TO_M, 4.0 * FT_TO_M)),
)

DEFAULT_FOOTPRINT = Footprint(1.2, 0.8)


def machine_footprint(machine_type: str) -> Footprint:
    return classify(machine_type, FOOTPRINT_RULES, DEFAULT_FOOTPRINT)
