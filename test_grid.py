"""
Tests for the grid store and the unit registry.
"""

import unittest

from arena.core import DIRECTIONS, Cell, Direction, Faction, InvariantViolation
from arena.world import BattleWorld, Grid


class TestGrid(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = Grid.empty(4, 5)

    def test_dimensions(self) -> None:
        self.assertEqual(self.grid.height, 4)
        self.assertEqual(self.grid.width, 5)

    def test_neighbors_north_west_east_south(self) -> None:
        self.assertEqual(
            self.grid.neighbors((2, 2)),
            [(1, 2), (2, 1), (2, 3), (3, 2)],
        )

    def test_neighbors_clipped_at_edges(self) -> None:
        self.assertEqual(self.grid.neighbors((0, 0)), [(0, 1), (1, 0)])
        self.assertEqual(self.grid.neighbors((3, 4)), [(2, 4), (3, 3)])

    def test_positions_follow_reading_order(self) -> None:
        positions = list(self.grid.positions())
        self.assertEqual(positions, sorted(positions))
        self.assertEqual(positions[:6], [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 0)])

    def test_set_and_get_cell(self) -> None:
        self.grid.set_cell((1, 1), Cell.WALL)
        self.assertTrue(self.grid.cell_at((1, 1)).is_wall)
        self.assertFalse(self.grid.is_open((1, 1)))
        self.assertEqual(self.grid.open_neighbors((1, 2)), [(0, 2), (1, 3), (2, 2)])

    def test_out_of_bounds_is_a_defect(self) -> None:
        with self.assertRaises(InvariantViolation):
            self.grid.cell_at((4, 0))
        with self.assertRaises(InvariantViolation):
            self.grid.set_cell((0, -1), Cell.WALL)
        self.assertFalse(self.grid.is_open((-1, 0)))

    def test_ragged_rows_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Grid([[Cell.OPEN, Cell.OPEN], [Cell.OPEN]])

    def test_copy_is_independent(self) -> None:
        clone = self.grid.copy()
        clone.set_cell((0, 0), Cell.WALL)
        self.assertTrue(self.grid.cell_at((0, 0)).is_open)

    def test_directions_in_priority_order(self) -> None:
        self.assertEqual([d.delta for d in DIRECTIONS], [(-1, 0), (0, -1), (0, 1), (1, 0)])
        self.assertEqual(Direction.NORTH.apply((2, 2)), (1, 2))
        self.assertEqual(Direction.EAST.apply((2, 2)), (2, 3))


class TestUnitRegistry(unittest.TestCase):
    def setUp(self) -> None:
        self.world = BattleWorld(Grid.empty(3, 4))
        self.units = self.world.units
        self.elf = self.units.add(Faction.ELF, (1, 2))
        self.goblin = self.units.add(Faction.GOBLIN, (0, 3))
        self.goblin2 = self.units.add(Faction.GOBLIN, (1, 0))

    def test_add_places_unit_on_grid(self) -> None:
        cell = self.world.grid.cell_at((1, 2))
        self.assertTrue(cell.is_occupied)
        self.assertEqual(cell.unit_id, self.elf.id)
        self.assertEqual([u.id for u in self.units], [0, 1, 2])

    def test_add_on_occupied_cell_fails(self) -> None:
        with self.assertRaises(InvariantViolation):
            self.units.add(Faction.GOBLIN, (1, 2))

    def test_turn_order_is_reading_order(self) -> None:
        self.assertEqual(self.units.turn_order(), [self.goblin.id, self.goblin2.id, self.elf.id])

    def test_turn_order_tracks_moves(self) -> None:
        self.units.move_unit(self.elf.id, (0, 2))
        self.assertEqual(self.units.turn_order(), [self.elf.id, self.goblin.id, self.goblin2.id])

    def test_move_updates_grid_and_unit(self) -> None:
        self.units.move_unit(self.elf.id, (2, 2))
        self.assertEqual(self.elf.pos, (2, 2))
        self.assertTrue(self.world.grid.is_open((1, 2)))
        self.assertEqual(self.world.grid.cell_at((2, 2)).unit_id, self.elf.id)
        self.world.check_invariants()

    def test_move_rejects_blocked_or_distant_cells(self) -> None:
        self.units.move_unit(self.elf.id, (1, 1))
        with self.assertRaises(InvariantViolation):
            self.units.move_unit(self.elf.id, (1, 0))
        with self.assertRaises(InvariantViolation):
            self.units.move_unit(self.elf.id, (1, 3))

    def test_damage_clamps_and_removes_once(self) -> None:
        self.assertFalse(self.units.apply_damage(self.goblin.id, 199))
        self.assertEqual(self.goblin.hit_points, 1)

        self.assertTrue(self.units.apply_damage(self.goblin.id, 3))
        self.assertEqual(self.goblin.hit_points, 0)
        self.assertFalse(self.units.is_alive(self.goblin.id))
        self.assertTrue(self.world.grid.is_open((0, 3)))

        with self.assertRaises(InvariantViolation):
            self.units.apply_damage(self.goblin.id, 3)

    def test_dead_unit_kept_as_tombstone(self) -> None:
        self.units.apply_damage(self.goblin2.id, 500)
        self.assertEqual(len(self.units), 3)
        self.assertIs(self.units.get(self.goblin2.id), self.goblin2)
        self.assertNotIn(self.goblin2.id, self.units.turn_order())
        self.assertEqual(self.units.casualties(Faction.GOBLIN), 1)
        with self.assertRaises(InvariantViolation):
            self.units.move_unit(self.goblin2.id, (2, 0))

    def test_remaining_hit_points(self) -> None:
        self.units.apply_damage(self.elf.id, 10)
        self.assertEqual(self.units.remaining_hit_points(Faction.ELF), 190)
        self.assertEqual(self.units.remaining_hit_points(), 590)
        self.assertTrue(self.units.has_living(Faction.GOBLIN))

    def test_invariant_check_catches_disagreement(self) -> None:
        self.world.check_invariants()
        self.elf.pos = (2, 3)
        with self.assertRaises(InvariantViolation):
            self.world.check_invariants()

    def test_world_round_trip(self) -> None:
        self.units.apply_damage(self.goblin.id, 200)
        self.world.completed_rounds = 4
        restored = BattleWorld.from_dict(self.world.to_dict())
        self.assertEqual(restored.completed_rounds, 4)
        self.assertEqual(restored.units.turn_order(), self.units.turn_order())
        self.assertFalse(restored.units.is_alive(self.goblin.id))

    def test_clone_shares_nothing(self) -> None:
        clone = self.world.clone()
        clone.units.apply_damage(self.elf.id, 50)
        clone.units.move_unit(self.goblin2.id, (2, 0))
        self.assertEqual(self.elf.hit_points, 200)
        self.assertEqual(self.goblin2.pos, (1, 0))
        self.world.check_invariants()


if __name__ == "__main__":
    unittest.main()
