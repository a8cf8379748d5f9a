"""
Tests for attack target selection, damage and outcome evaluation.
"""

import unittest

from arena import Faction, Verdict
from arena.mechanics import (
    REASON_ELF_CASUALTY,
    REASON_ELIMINATION,
    REASON_STALEMATE,
    BattleOutcome,
    CombatResolver,
    OutcomeEvaluator,
)
from arena.world import BattleWorld, Grid


class TestCombatResolver(unittest.TestCase):
    def setUp(self) -> None:
        # G....  9
        # ..G..  4
        # ..EG.  2
        # ..G..  2
        # ...G.  1
        self.world = BattleWorld(Grid.empty(5, 5))
        units = self.world.units
        self.far = units.add(Faction.GOBLIN, (0, 0), hit_points=9)
        self.north = units.add(Faction.GOBLIN, (1, 2), hit_points=4)
        self.elf = units.add(Faction.ELF, (2, 2))
        self.east = units.add(Faction.GOBLIN, (2, 3), hit_points=2)
        self.south = units.add(Faction.GOBLIN, (3, 2), hit_points=2)
        self.diagonal = units.add(Faction.GOBLIN, (4, 3), hit_points=1)
        self.resolver = CombatResolver()

    def test_weakest_adjacent_then_reading_order(self) -> None:
        self.assertIs(self.resolver.select_target(self.world, self.elf), self.east)

    def test_diagonal_units_are_not_adjacent(self) -> None:
        self.assertNotIn(self.diagonal, self.world.adjacent_enemies(self.elf))

    def test_attack_applies_attack_power(self) -> None:
        result = self.resolver.resolve(self.world, self.north)
        self.assertEqual(result.target_id, self.elf.id)
        self.assertEqual(result.damage, 3)
        self.assertEqual(self.elf.hit_points, 197)
        self.assertFalse(result.target_killed)

    def test_kill_frees_cell(self) -> None:
        result = self.resolver.resolve(self.world, self.elf)
        self.assertTrue(result.target_killed)
        self.assertEqual(result.target_hit_points, 0)
        self.assertFalse(self.east.alive)
        self.assertTrue(self.world.grid.is_open((2, 3)))
        self.assertIn("KILLED", result.log)

        # The next weakest is now the southern goblin.
        self.assertIs(self.resolver.select_target(self.world, self.elf), self.south)

    def test_no_adjacent_enemy(self) -> None:
        self.assertIsNone(self.resolver.resolve(self.world, self.far))

    def test_allies_are_never_targets(self) -> None:
        self.assertNotIn(self.south, self.world.adjacent_enemies(self.diagonal))
        self.assertEqual(self.world.adjacent_enemies(self.north), [self.elf])


class TestOutcomeEvaluator(unittest.TestCase):
    def setUp(self) -> None:
        self.world = BattleWorld(Grid.empty(2, 3))
        self.elf = self.world.units.add(Faction.ELF, (0, 0))
        self.goblin = self.world.units.add(Faction.GOBLIN, (0, 1))
        self.evaluator = OutcomeEvaluator()

    def _finish(self, winner, reason) -> BattleOutcome:
        self.world.game_over = True
        self.world.winner = winner
        self.world.game_over_reason = reason
        return self.evaluator.evaluate(self.world)

    def test_surviving_faction(self) -> None:
        self.assertIsNone(self.evaluator.surviving_faction(self.world))
        self.world.units.apply_damage(self.goblin.id, 200)
        self.assertIs(self.evaluator.surviving_faction(self.world), Faction.ELF)

    def test_round_cap(self) -> None:
        self.assertFalse(self.evaluator.round_cap_reached(self.world, None))
        self.world.completed_rounds = 3
        self.assertTrue(self.evaluator.round_cap_reached(self.world, 3))
        self.assertFalse(self.evaluator.round_cap_reached(self.world, 4))

    def test_elf_victory_without_losses(self) -> None:
        self.world.units.apply_damage(self.elf.id, 20)
        self.world.units.apply_damage(self.goblin.id, 200)
        self.world.completed_rounds = 10
        outcome = self._finish(Faction.ELF, REASON_ELIMINATION)

        self.assertEqual(outcome.verdict, Verdict.VICTORY)
        self.assertEqual(outcome.remaining_hit_points, 180)
        self.assertEqual(outcome.score, 1800)
        self.assertEqual(outcome.summary, (10, 180))
        self.assertEqual(outcome.elf_losses, 0)

    def test_elf_victory_with_losses_is_defeat(self) -> None:
        ally = self.world.units.add(Faction.ELF, (1, 0))
        self.world.units.apply_damage(ally.id, 200)
        self.world.units.apply_damage(self.goblin.id, 200)
        outcome = self._finish(Faction.ELF, REASON_ELIMINATION)

        self.assertEqual(outcome.winner, Faction.ELF)
        self.assertEqual(outcome.verdict, Verdict.DEFEAT)
        self.assertEqual(outcome.elf_losses, 1)

    def test_goblin_win_is_defeat(self) -> None:
        self.world.units.apply_damage(self.elf.id, 200)
        outcome = self._finish(Faction.GOBLIN, REASON_ELIMINATION)
        self.assertEqual(outcome.verdict, Verdict.DEFEAT)
        self.assertEqual(outcome.remaining_hit_points, 200)

    def test_no_winner(self) -> None:
        self.assertEqual(self._finish(None, REASON_STALEMATE).verdict, Verdict.DEADLOCK)
        self.assertEqual(self._finish(None, REASON_ELF_CASUALTY).verdict, Verdict.DEFEAT)

    def test_outcome_round_trip(self) -> None:
        self.world.completed_rounds = 7
        outcome = self._finish(None, REASON_STALEMATE)
        data = outcome.to_dict()
        self.assertEqual(data["score"], 7 * 400)
        self.assertIsNone(data["winner"])
        self.assertEqual(BattleOutcome.from_dict(data), outcome)


if __name__ == "__main__":
    unittest.main()
