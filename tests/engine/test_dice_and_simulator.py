import unittest

from ludo_state.config import Config
from ludo_state.dice import Dice
from ludo_state.selectors import FirstMoveSelector, RandomSelector, create
from ludo_state.simulator import Simulator
from ludo_state.turn import TurnMachine
from ludo_state.types import Color, TurnPhase


class TestDice(unittest.TestCase):
    def test_range(self):
        dice = Dice(seed=3)
        for _ in range(200):
            self.assertTrue(1 <= dice.roll() <= 6)

    def test_seed_is_reproducible(self):
        a, b = Dice(seed=11), Dice(seed=11)
        self.assertEqual([a.roll() for _ in range(20)], [b.roll() for _ in range(20)])

    def test_forced_values_come_first(self):
        dice = Dice(seed=1)
        dice.force(6, 6, 1)
        self.assertEqual(dice.pending, 3)
        self.assertEqual([dice.roll() for _ in range(3)], [6, 6, 1])
        self.assertEqual(dice.pending, 0)

    def test_forced_values_are_checked(self):
        with self.assertRaises(ValueError):
            Dice().force(0)

    def test_reseed_drops_forced_values(self):
        dice = Dice(seed=5)
        dice.force_all([2, 3])
        dice.reseed(5)
        self.assertEqual(dice.pending, 0)
        self.assertEqual(dice.roll(), Dice(seed=5).roll())


class TestSelectors(unittest.TestCase):
    def test_first(self):
        self.assertEqual(FirstMoveSelector().select(Color.RED, (1, 3)), 1)

    def test_random_picks_an_option(self):
        selector = RandomSelector(seed=4)
        for _ in range(20):
            self.assertIn(selector.select(Color.RED, (0, 2, 3)), (0, 2, 3))

    def test_create(self):
        self.assertIsInstance(create("first"), FirstMoveSelector)
        self.assertIsInstance(create(" Random ", seed=1), RandomSelector)
        with self.assertRaises(KeyError):
            create("clever")


class TestSimulator(unittest.TestCase):
    def test_plays_to_a_winner(self):
        sim = Simulator.seeded(7, RandomSelector(seed=7))
        sim.max_rolls = 20_000
        result = sim.run()
        self.assertTrue(result.completed)
        self.assertEqual(result.finished[result.winner], 4)
        self.assertTrue(sim.machine.game.player(result.winner).has_won())
        self.assertIs(sim.machine.state.phase, TurnPhase.GAME_OVER)
        self.assertGreater(result.moves, 0)
        for player in sim.machine.game.players:
            player.check()

    def test_finished_counts_match_players(self):
        sim = Simulator.seeded(3, RandomSelector(seed=3))
        sim.max_rolls = 400
        result = sim.run()
        for player in sim.machine.game.players:
            self.assertEqual(result.finished[player.color], player.finished_count())

    def test_reproducible(self):
        first = Simulator.seeded(21).run()
        second = Simulator.seeded(21).run()
        self.assertEqual(first.winner, second.winner)
        self.assertEqual(first.rolls, second.rolls)
        self.assertEqual(first.captures, second.captures)

    def test_stops_at_roll_cap(self):
        sim = Simulator(machine=TurnMachine(dice=Dice(seed=2)), max_rolls=5)
        result = sim.run()
        self.assertEqual(result.rolls, 5)
        self.assertFalse(result.completed)

    def test_on_roll_callback(self):
        seen = []
        sim = Simulator(machine=TurnMachine(dice=Dice(seed=2)), max_rolls=3)
        sim.run(on_roll=lambda r: seen.append(r.rolls))
        self.assertEqual(seen, [1, 2, 3])

    def test_counts_forfeits(self):
        machine = TurnMachine(dice=Dice(seed=0))
        machine.dice.force(6, 6, 6)
        sim = Simulator(machine=machine, max_rolls=3)
        result = sim.run()
        self.assertEqual(result.forfeits, 1)
        self.assertEqual(result.moves, 2)
        self.assertIs(machine.current_color, Color.RED)


class TestConfig(unittest.TestCase):
    def test_derived_positions(self):
        cfg = Config()
        self.assertEqual(cfg.LAST_TRACK_STEP, 50)
        self.assertEqual(cfg.HOME_START, 51)
        self.assertEqual(cfg.GOAL, 56)

    def test_validation(self):
        with self.assertRaises(ValueError):
            Config(MAX_CONSECUTIVE_SIXES=0)
        with self.assertRaises(ValueError):
            Config(ENTRY_OFFSETS=[0, 13])
        with self.assertRaises(ValueError):
            Config(SAFE_CELLS=[60])
        with self.assertRaises(ValueError):
            Config(STEP_DELAY=-1.0)


if __name__ == "__main__":
    unittest.main()
