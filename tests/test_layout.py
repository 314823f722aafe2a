"""Tests for the lane placer and the layout generator.

Uses the shirt fixture as the main integration case, plus small
hand-checked bulletins whose coordinates are worked out below from the
default floor rules:

  section gap 2.0, board clearance 1.5, machine pitch 2.0,
  inspection offset 1.0, trolley +3.5 along / 0.5 across,
  fixture clearance 1.0.

Validates:
  - Per-operation lane alternation inside a lane pair
  - Assembly round-robin over A/B/C and buttoning in D
  - Lane facing conventions and forced front facing
  - No two machines share a lane slot
  - Determinism (identical layouts apart from ids)
  - Fixtures are never Operations
  - Optional transition fixtures before assembly
"""

from __future__ import annotations

import math
import unittest
from dataclasses import replace

from lineplanner.pipeline.balancing import BalancedOperation, InvalidDemand, plan
from lineplanner.pipeline.config import FLOOR_RULES
from lineplanner.pipeline.layout import (
    FIXTURE_INDEX,
    Fixture,
    FixtureKind,
    Lane,
    LaneCursors,
    PlacedEntity,
    generate_layout,
    group_sections,
    place_sections,
)
from lineplanner.pipeline.layout.engine import (
    place_assembly_section,
    place_preparation_section,
    place_transition_fixtures,
)
from lineplanner.pipeline.operations import Operation
from tests.shirt_fixture import (
    SHIRT_COUNTS, SHIRT_MINUTES, SHIRT_TARGET, make_shirt_operations, op,
)


RULES = FLOOR_RULES


def machines(entities: list[PlacedEntity]) -> list[PlacedEntity]:
    return [e for e in entities if e.is_machine]


def fixtures(entities: list[PlacedEntity], kind: FixtureKind) -> list[PlacedEntity]:
    return [e for e in entities if e.fixture_kind is kind]


def signature(e: PlacedEntity) -> tuple:
    """Everything but the id."""
    return (e.lane, e.position, e.rotation, e.section, e.sequence_index, e.source)


class TestExamples(unittest.TestCase):
    """Hand-checked small bulletins."""

    def test_single_machine(self):
        """One op in Cuff → one machine in lane A right after the board."""
        layout = generate_layout([op("1", 1.0, "Cuff")], 480, 480)
        ms = machines(layout)
        self.assertEqual(len(ms), 1)
        m = ms[0]
        self.assertIs(m.lane, Lane.A)
        # section start 0 + 2.0 gap, then 1.5 board clearance
        self.assertAlmostEqual(m.position.x, 3.5)
        self.assertAlmostEqual(m.position.y, 0.0)
        self.assertAlmostEqual(m.position.z, RULES.lane_a_z)
        self.assertAlmostEqual(m.rotation.y, RULES.yaw_left)
        self.assertEqual(m.sequence_index, 0)
        self.assertEqual(m.section, "Cuff")

        board = fixtures(layout, FixtureKind.BOARD)[0]
        self.assertAlmostEqual(board.position.x, 2.0)
        self.assertAlmostEqual(board.position.y, RULES.board_height)
        self.assertIs(board.lane, Lane.A)

    def test_two_operations_alternate_lanes(self):
        layout = generate_layout(
            [op("1", 2.0, "Cuff"), op("2", 1.0, "Cuff")], 480, 480)
        ms = machines(layout)
        self.assertEqual(len(ms), 3)

        first = [m for m in ms if m.source.op_no == "1"]
        second = [m for m in ms if m.source.op_no == "2"]
        self.assertEqual([m.lane for m in first], [Lane.A, Lane.A])
        self.assertEqual([m.position.x for m in first], [3.5, 5.5])
        self.assertEqual([m.sequence_index for m in first], [0, 1])
        self.assertEqual([m.lane for m in second], [Lane.B])
        self.assertEqual(second[0].position.x, 3.5)
        self.assertAlmostEqual(second[0].rotation.y, RULES.yaw_right)

    def test_assembly_three_by_three(self):
        """3 ops × 3 machines → 3 per lane over A/B/C, one row per op."""
        ops = [op(str(i), 3.0, "Assembly") for i in (1, 2, 3)]
        layout = generate_layout(ops, 480, 480)
        ms = machines(layout)
        self.assertEqual(len(ms), 9)

        per_lane = {lane: [m for m in ms if m.lane is lane] for lane in Lane}
        self.assertEqual(len(per_lane[Lane.A]), 3)
        self.assertEqual(len(per_lane[Lane.B]), 3)
        self.assertEqual(len(per_lane[Lane.C]), 3)
        self.assertEqual(len(per_lane[Lane.D]), 0)

        for i, op_no in enumerate(("1", "2", "3")):
            row = [m for m in ms if m.source.op_no == op_no]
            self.assertEqual({m.lane for m in row}, {Lane.A, Lane.B, Lane.C})
            self.assertEqual({m.position.x for m in row}, {2.0 + 2.0 * i})

        for m in ms:
            self.assertAlmostEqual(m.rotation.y, RULES.yaw_front)

    def test_empty_bulletin(self):
        self.assertEqual(generate_layout([], 480, 480), [])

    def test_zero_target_raises(self):
        with self.assertRaises(InvalidDemand):
            generate_layout([op("1", 1.0, "Cuff")], 0, 480)


class TestPreparationSection(unittest.TestCase):

    def test_cd_section_uses_c_then_d(self):
        layout = generate_layout(
            [op("1", 1.0, "Collar"), op("2", 1.0, "Collar"), op("3", 1.0, "Collar")],
            480, 480)
        lanes = [m.lane for m in machines(layout)]
        self.assertEqual(lanes, [Lane.C, Lane.D, Lane.C])
        board = fixtures(layout, FixtureKind.BOARD)[0]
        self.assertIs(board.lane, Lane.C)
        self.assertAlmostEqual(board.position.z, RULES.lane_c_z)

    def test_unknown_section_defaults_to_ab(self):
        layout = generate_layout([op("1", 1.0, "")], 480, 480)
        m = machines(layout)[0]
        self.assertIs(m.lane, Lane.A)
        self.assertEqual(m.section, "Unknown")

    def test_inspection_and_trolley(self):
        """Fixtures close the section on the inner lane, past the longer lane."""
        layout = generate_layout(
            [op("1", 3.0, "Cuff"), op("2", 1.0, "Cuff")], 480, 480)
        # lane A: 3 machines from 3.5 → cursor 9.5; lane B cursor 5.5
        inspection = fixtures(layout, FixtureKind.INSPECTION)
        trolley = fixtures(layout, FixtureKind.TROLLEY)
        self.assertEqual(len(inspection), 1)
        self.assertEqual(len(trolley), 1)

        self.assertIs(inspection[0].lane, Lane.A)
        self.assertAlmostEqual(inspection[0].position.x, 10.5)
        self.assertAlmostEqual(inspection[0].position.z, RULES.lane_a_z)
        self.assertAlmostEqual(inspection[0].rotation.y, RULES.yaw_front)
        self.assertTrue(inspection[0].is_inspection)

        self.assertIs(trolley[0].lane, Lane.A)
        self.assertAlmostEqual(trolley[0].position.x, 14.0)
        # shifted from lane A toward lane B
        self.assertAlmostEqual(trolley[0].position.z, RULES.lane_a_z - RULES.trolley_offset_z)
        self.assertAlmostEqual(trolley[0].rotation.y, RULES.yaw_right)
        self.assertTrue(trolley[0].is_trolley)

    def test_cd_trolley_shifts_toward_d(self):
        layout = generate_layout([op("1", 1.0, "Collar")], 480, 480)
        trolley = fixtures(layout, FixtureKind.TROLLEY)[0]
        self.assertAlmostEqual(trolley.position.z, RULES.lane_c_z + RULES.trolley_offset_z)

    def test_next_section_starts_after_fixtures(self):
        layout = generate_layout(
            [op("1", 1.0, "Cuff"), op("2", 1.0, "Sleeve")], 480, 480)
        cuff_trolley = next(e for e in layout if e.is_trolley and e.section == "Cuff")
        sleeve_board = next(e for e in layout if e.is_board and e.section == "Sleeve")
        sleeve_machine = next(e for e in machines(layout) if e.section == "Sleeve")
        # trolley 10.0 + clearance 1.0 + gap 2.0
        self.assertAlmostEqual(cuff_trolley.position.x, 10.0)
        self.assertAlmostEqual(sleeve_board.position.x, 13.0)
        self.assertAlmostEqual(sleeve_machine.position.x, 14.5)

    def test_pairs_are_independent(self):
        """A CD section after an AB section starts from the CD cursors."""
        layout = generate_layout(
            [op("1", 5.0, "Cuff"), op("2", 1.0, "Collar")], 480, 480)
        collar = next(e for e in machines(layout) if e.section == "Collar")
        self.assertAlmostEqual(collar.position.x, 3.5)

    def test_sync_uses_longer_lane(self):
        cursors = LaneCursors(a=4.0, b=10.0)
        items = [BalancedOperation(op("1", 1.0, "Cuff"), 1)]
        placed, after = place_preparation_section("Cuff", items, (Lane.A, Lane.B), cursors)
        board = placed[0]
        self.assertTrue(board.is_board)
        self.assertAlmostEqual(board.position.x, 12.0)
        self.assertAlmostEqual(placed[1].position.x, 13.5)
        self.assertEqual(after.a, after.b)
        self.assertEqual((after.c, after.d), (0.0, 0.0))

    def test_forced_front_in_preparation(self):
        layout = generate_layout(
            [op("1", 1.0, "Cuff", "SNLS"), op("2", 1.0, "Cuff", "Iron Press")], 480, 480)
        by_op = {m.source.op_no: m for m in machines(layout)}
        self.assertAlmostEqual(by_op["1"].rotation.y, RULES.yaw_left)
        self.assertIs(by_op["2"].lane, Lane.B)
        self.assertAlmostEqual(by_op["2"].rotation.y, RULES.yaw_front)


class TestAssemblySection(unittest.TestCase):

    def test_syncs_all_lanes(self):
        cursors = LaneCursors(a=3.0, b=7.0, c=11.0, d=5.0)
        items = [BalancedOperation(op("1", 1.0, "Assembly"), 1)]
        placed, after = place_assembly_section("Assembly", items, cursors)
        board = placed[0]
        self.assertTrue(board.is_board)
        self.assertAlmostEqual(board.position.x, 13.0)
        self.assertAlmostEqual(board.position.z, RULES.assembly_board_z)
        self.assertAlmostEqual(placed[1].position.x, 13.0)
        self.assertEqual({after.a, after.b, after.c, after.d}, {15.0})

    def test_partial_row(self):
        """4 machines → A, B, C on row 0 and A on row 1."""
        items = [BalancedOperation(op("1", 4.0, "Assembly"), 4)]
        placed, after = place_assembly_section("Assembly", items, LaneCursors())
        ms = machines(placed)
        self.assertEqual([m.lane for m in ms], [Lane.A, Lane.B, Lane.C, Lane.A])
        self.assertEqual([m.position.x for m in ms], [2.0, 2.0, 2.0, 4.0])
        self.assertEqual([m.sequence_index for m in ms], [0, 1, 2, 3])
        self.assertAlmostEqual(after.a, 6.0)

    def test_buttoning_goes_to_lane_d(self):
        items = [
            BalancedOperation(op("1", 1.0, "Assembly", "Overlock"), 3),
            BalancedOperation(op("2", 1.0, "Assembly", "Button Hole"), 2),
            BalancedOperation(op("3", 1.0, "Assembly", "Special", "Button wrapping"), 3),
        ]
        placed, after = place_assembly_section("Assembly", items, LaneCursors())
        ms = machines(placed)
        d = [m for m in ms if m.lane is Lane.D]
        self.assertEqual([m.source.op_no for m in d], ["2", "2", "3", "3", "3"])
        self.assertEqual([m.position.x for m in d], [2.0, 4.0, 6.0, 8.0, 10.0])
        for m in d:
            self.assertAlmostEqual(m.rotation.y, RULES.yaw_front)
        # buttoning run is longer than the single main row
        self.assertEqual({after.a, after.b, after.c, after.d}, {12.0})


class TestTransitionFixtures(unittest.TestCase):

    OPS = [op("1", 1.0, "Cuff"), op("2", 1.0, "Collar"), op("3", 1.0, "Assembly")]

    def test_disabled_by_default(self):
        layout = generate_layout(self.OPS, 480, 480)
        self.assertEqual(fixtures(layout, FixtureKind.SUPERMARKET), [])
        self.assertEqual(fixtures(layout, FixtureKind.WORK_TABLE), [])

    def test_enabled_inserts_before_assembly(self):
        rules = replace(FLOOR_RULES, transition_fixtures=True)
        layout = generate_layout(self.OPS, 480, 480, rules=rules)
        supermarket = fixtures(layout, FixtureKind.SUPERMARKET)
        table = fixtures(layout, FixtureKind.WORK_TABLE)
        self.assertEqual(len(supermarket), 1)
        self.assertEqual(len(table), 1)

        # Cuff and Collar both end with the trolley at 10.0 + clearance → 11.0
        self.assertAlmostEqual(supermarket[0].position.x, 12.0)
        self.assertAlmostEqual(supermarket[0].position.z, (RULES.lane_a_z + RULES.lane_b_z) / 2)
        self.assertAlmostEqual(table[0].position.z, (RULES.lane_c_z + RULES.lane_d_z) / 2)

        assembly = next(e for e in machines(layout) if e.section == "Assembly")
        self.assertAlmostEqual(assembly.position.x, 15.0)

        order = [e.fixture_kind for e in layout if not e.is_machine]
        self.assertLess(order.index(FixtureKind.WORK_TABLE),
                        max(i for i, k in enumerate(order) if k is FixtureKind.BOARD))

    def test_not_inserted_without_preparation(self):
        rules = replace(FLOOR_RULES, transition_fixtures=True)
        layout = generate_layout([op("1", 1.0, "Assembly")], 480, 480, rules=rules)
        self.assertEqual(fixtures(layout, FixtureKind.SUPERMARKET), [])

    def test_helper_advances_both_pairs(self):
        placed, after = place_transition_fixtures(LaneCursors(a=5.0, b=3.0, c=1.0, d=2.0))
        self.assertEqual(len(placed), 2)
        self.assertEqual((after.a, after.b), (7.0, 7.0))
        self.assertEqual((after.c, after.d), (4.0, 4.0))


class TestShirtLayout(unittest.TestCase):
    """Integration test using the shirt fixture."""

    @classmethod
    def setUpClass(cls):
        cls.ops = make_shirt_operations()
        cls.layout = generate_layout(cls.ops, SHIRT_TARGET, SHIRT_MINUTES)

    def test_every_machine_instance_placed(self):
        ms = machines(self.layout)
        self.assertEqual(len(ms), sum(SHIRT_COUNTS.values()))
        for op_no, count in SHIRT_COUNTS.items():
            placed = [m for m in ms if m.source.op_no == op_no]
            self.assertEqual(len(placed), count, op_no)
            self.assertEqual(sorted(m.sequence_index for m in placed), list(range(count)))

    def test_one_board_per_section(self):
        boards = fixtures(self.layout, FixtureKind.BOARD)
        self.assertEqual([b.section for b in boards],
                         ["Collar", "Cuff", "Sleeve", "Front", "Back", "Assembly"])

    def test_inspection_and_trolley_per_preparation_section(self):
        self.assertEqual(len(fixtures(self.layout, FixtureKind.INSPECTION)), 5)
        self.assertEqual(len(fixtures(self.layout, FixtureKind.TROLLEY)), 5)

    def test_no_shared_lane_slots(self):
        slots = [(m.lane, m.position.x) for m in machines(self.layout)]
        self.assertEqual(len(slots), len(set(slots)))

    def test_lane_facing(self):
        expected = {
            Lane.A: RULES.yaw_left,
            Lane.B: RULES.yaw_right,
            Lane.C: RULES.yaw_right,
            Lane.D: RULES.yaw_left,
        }
        for m in machines(self.layout):
            if m.section == "Assembly":
                self.assertAlmostEqual(m.rotation.y, RULES.yaw_front)
            elif "iron" in m.source.machine_type.lower():
                self.assertAlmostEqual(m.rotation.y, RULES.yaw_front)
            else:
                self.assertAlmostEqual(m.rotation.y, expected[m.lane],
                                       msg=f"{m.id} in lane {m.lane.value}")

    def test_only_yaw_rotates(self):
        for e in self.layout:
            self.assertEqual(e.rotation.x, 0.0)
            self.assertEqual(e.rotation.z, 0.0)

    def test_sections_in_line_order_per_lane(self):
        """Within each lane, machine x never decreases in placement order."""
        for lane in Lane:
            xs = [m.position.x for m in machines(self.layout) if m.lane is lane]
            self.assertEqual(xs, sorted(xs), lane)

    def test_assembly_after_all_preparation(self):
        ms = machines(self.layout)
        last_prep = max(e.position.x for e in self.layout if e.section != "Assembly")
        first_asm = min(m.position.x for m in ms if m.section == "Assembly")
        self.assertGreater(first_asm, last_prep)

    def test_assembly_buttoning_in_d(self):
        asm = [m for m in machines(self.layout) if m.section == "Assembly"]
        d_ops = {m.source.op_no for m in asm if m.lane is Lane.D}
        self.assertEqual(d_ops, {"64", "65"})

    def test_fixtures_are_not_operations(self):
        for e in self.layout:
            if e.is_machine:
                self.assertIsInstance(e.source, Operation)
                self.assertGreaterEqual(e.sequence_index, 0)
            else:
                self.assertIsInstance(e.source, Fixture)
                self.assertNotIsInstance(e.source, Operation)
                self.assertEqual(e.sequence_index, FIXTURE_INDEX)

    def test_ids_unique(self):
        ids = [e.id for e in self.layout]
        self.assertEqual(len(ids), len(set(ids)))

    def test_deterministic(self):
        again = generate_layout(self.ops, SHIRT_TARGET, SHIRT_MINUTES)
        self.assertEqual([signature(e) for e in again],
                         [signature(e) for e in self.layout])

    def test_place_sections_matches_generator(self):
        balanced = plan(self.ops, SHIRT_TARGET, SHIRT_MINUTES)
        placed = place_sections(group_sections(balanced))
        self.assertEqual([signature(e) for e in placed],
                         [signature(e) for e in self.layout])

    def test_custom_pitch(self):
        rules = replace(FLOOR_RULES, machine_pitch=3.0)
        layout = generate_layout(
            [op("1", 2.0, "Cuff")], 480, 480, rules=rules)
        self.assertEqual([m.position.x for m in machines(layout)], [3.5, 6.5])


class TestLaneCursors(unittest.TestCase):

    def test_updates_return_new_values(self):
        c = LaneCursors()
        c2 = c.set(Lane.B, 4.0)
        self.assertEqual(c.b, 0.0)
        self.assertEqual(c2.b, 4.0)
        self.assertEqual(c2[Lane.B], 4.0)

    def test_sync_and_advance(self):
        c = LaneCursors(a=1.0, b=3.0, c=2.0, d=0.5)
        self.assertEqual(c.furthest(), 3.0)
        self.assertEqual(c.furthest((Lane.C, Lane.D)), 2.0)
        synced = c.synced((Lane.C, Lane.D), 9.0)
        self.assertEqual((synced.c, synced.d), (9.0, 9.0))
        adv = synced.advanced((Lane.A,), 1.5)
        self.assertEqual(adv.a, 2.5)
        self.assertTrue(math.isclose(adv.b, 3.0))


if __name__ == "__main__":
    unittest.main()
