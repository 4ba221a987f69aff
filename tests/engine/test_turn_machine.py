import unittest

from ludo_state.dice import Dice
from ludo_state.events import DiceRolled, EventRecorder, GameWon, PieceMoved, StatusMessage, TurnChanged
from ludo_state.turn import TurnMachine
from ludo_state.types import Color, TurnPhase


class TurnMachineTestCase(unittest.TestCase):
    auto_select = True

    def setUp(self):
        self.machine = TurnMachine(dice=Dice(seed=0), auto_select=self.auto_select)
        self.recorder = EventRecorder()
        self.machine.subscribe(self.recorder)

    def place(self, color, index, travelled):
        piece = self.machine.game.player(color).piece(index)
        piece.place(travelled)
        return piece

    @property
    def state(self):
        return self.machine.state


class TestRolling(TurnMachineTestCase):
    def test_initial_state(self):
        self.assertIs(self.state.phase, TurnPhase.AWAITING_ROLL)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.state.dice_value, 0)
        self.assertFalse(self.state.move_pending)

    def test_turn_order(self):
        seen = []
        for _ in range(5):
            seen.append(self.state.color)
            self.assertTrue(self.machine.roll(2))
        self.assertEqual(seen, [Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE])

    def test_no_move_without_six_passes_turn(self):
        self.assertTrue(self.machine.roll(3))
        self.assertIs(self.state.color, Color.RED)
        self.assertEqual(self.state.dice_value, 0)
        self.assertEqual(self.state.consecutive_sixes, 0)
        self.assertEqual(self.machine.last_roll.valid_moves, ())
        self.assertEqual(
            self.recorder.events,
            [
                DiceRolled(3),
                StatusMessage("No moves for Blue."),
                TurnChanged(Color.RED),
                DiceRolled(0),
                StatusMessage("Red's turn"),
            ],
        )

    def test_roll_out_of_turn_is_ignored(self):
        self.assertFalse(self.machine.roll(3, color=Color.RED))
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.recorder.events, [])

    def test_roll_value_is_checked(self):
        with self.assertRaises(ValueError):
            self.machine.roll(7)

    def test_request_roll_draws_from_dice(self):
        self.machine.dice.force(4)
        self.assertTrue(self.machine.request_roll(Color.BLUE))
        self.assertEqual(self.machine.last_roll.value, 4)
        self.assertIs(self.state.color, Color.RED)

    def test_six_with_several_moves_waits_for_selection(self):
        self.assertTrue(self.machine.roll(6))
        self.assertIs(self.state.phase, TurnPhase.AWAITING_SELECTION)
        self.assertTrue(self.state.move_pending)
        self.assertEqual(self.state.valid_moves, (0, 1, 2, 3))
        self.assertEqual(self.state.dice_value, 6)
        # a second roll while the move is pending is refused
        self.assertFalse(self.machine.request_roll())
        self.assertFalse(self.machine.roll(2))


class TestSelection(TurnMachineTestCase):
    def setUp(self):
        super().setUp()
        self.machine.roll(6)

    def test_rejects_other_color(self):
        self.assertFalse(self.machine.select_piece(Color.RED, 0))
        self.assertIs(self.state.phase, TurnPhase.AWAITING_SELECTION)

    def test_rejects_piece_not_offered(self):
        self.assertFalse(self.machine.select_piece(Color.BLUE, 7))
        self.assertTrue(self.state.move_pending)

    def test_exit_grants_bonus_roll(self):
        self.assertTrue(self.machine.select_piece(Color.BLUE, 2))
        self.assertEqual(self.machine.game.player(Color.BLUE).piece(2).travelled, 0)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertIs(self.state.phase, TurnPhase.AWAITING_ROLL)
        self.assertFalse(self.state.move_pending)
        self.assertEqual(self.state.consecutive_sixes, 1)
        self.assertEqual(self.recorder.messages()[-1], "Moved out! Roll again.")

    def test_selection_when_not_awaiting(self):
        self.machine.select_piece(Color.BLUE, 0)
        self.assertFalse(self.machine.select_piece(Color.BLUE, 1))


class TestAutoSelect(TurnMachineTestCase):
    def test_single_move_is_applied(self):
        self.place(Color.BLUE, 0, 10)
        self.assertTrue(self.machine.roll(3))
        self.assertEqual(self.machine.game.player(Color.BLUE).piece(0).travelled, 13)
        self.assertIs(self.state.color, Color.RED)
        self.assertIsNotNone(self.machine.last_roll.result)


class TestAutoSelectDisabled(TurnMachineTestCase):
    auto_select = False

    def test_single_move_waits(self):
        self.place(Color.BLUE, 0, 10)
        self.machine.roll(3)
        self.assertIs(self.state.phase, TurnPhase.AWAITING_SELECTION)
        self.assertEqual(self.state.valid_moves, (0,))
        self.assertTrue(self.machine.select_piece(Color.BLUE, 0))
        self.assertIs(self.state.color, Color.RED)


class TestSixes(TurnMachineTestCase):
    def test_three_sixes_forfeit(self):
        self.machine.roll(6)
        self.machine.select_piece(Color.BLUE, 0)
        self.machine.roll(6)
        self.machine.select_piece(Color.BLUE, 0)
        self.assertEqual(self.state.consecutive_sixes, 2)
        before = self.machine.game.player(Color.BLUE).travelled()

        self.assertTrue(self.machine.roll(6))
        self.assertTrue(self.machine.last_roll.forfeited)
        self.assertIsNone(self.machine.last_roll.result)
        self.assertEqual(self.machine.game.player(Color.BLUE).travelled(), before)
        self.assertIs(self.state.color, Color.RED)
        self.assertEqual(self.state.consecutive_sixes, 0)
        self.assertIn("Blue rolled 3 6s! Turn lost.", self.recorder.messages())

    def test_six_without_moves_rerolls(self):
        for i in range(3):
            self.place(Color.BLUE, i, 56)
        self.place(Color.BLUE, 3, 52)
        self.machine.roll(6)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertIs(self.state.phase, TurnPhase.AWAITING_ROLL)
        self.assertTrue(self.machine.last_roll.extra_turn)
        self.assertEqual(self.recorder.messages()[-1], "No moves, but rolled 6! Roll again.")

    def test_sixes_without_moves_still_count_toward_forfeit(self):
        for i in range(3):
            self.place(Color.BLUE, i, 56)
        self.place(Color.BLUE, 3, 52)
        self.machine.roll(6)
        self.machine.roll(6)
        self.assertEqual(self.state.consecutive_sixes, 2)
        self.machine.roll(6)
        self.assertTrue(self.machine.last_roll.forfeited)
        self.assertIs(self.state.color, Color.RED)

    def test_non_six_resets_counter(self):
        self.place(Color.BLUE, 0, 5)
        self.machine.roll(6)
        self.machine.select_piece(Color.BLUE, 0)
        self.assertEqual(self.state.consecutive_sixes, 1)
        self.place(Color.RED, 0, 20)  # track 46
        self.place(Color.BLUE, 0, 43)
        self.machine.roll(3)  # single move, captures
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.state.consecutive_sixes, 0)


class TestBonusTurns(TurnMachineTestCase):
    def test_capture_keeps_turn(self):
        self.place(Color.BLUE, 0, 43)
        red = self.place(Color.RED, 0, 20)
        self.machine.roll(3)
        self.assertTrue(red.in_base)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.recorder.messages()[-1], "Cut opponent! Bonus roll.")

    def test_safe_landing_passes_turn(self):
        self.place(Color.BLUE, 0, 44)
        red = self.place(Color.RED, 0, 21)
        self.machine.roll(3)
        self.assertEqual(red.travelled, 21)
        self.assertIs(self.state.color, Color.RED)

    def test_home_stretch_move(self):
        self.place(Color.BLUE, 0, 48)
        self.machine.roll(5)
        self.assertEqual(self.machine.game.player(Color.BLUE).piece(0).travelled, 53)
        self.assertIs(self.state.color, Color.RED)

    def test_finishing_keeps_turn(self):
        self.place(Color.BLUE, 1, 53)
        self.machine.roll(3)
        self.assertTrue(self.machine.game.player(Color.BLUE).piece(1).finished)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.recorder.messages()[-1], "Piece finished! Bonus roll.")

    def test_plain_six_keeps_turn(self):
        self.place(Color.BLUE, 0, 10)
        self.machine.roll(6)
        self.machine.select_piece(Color.BLUE, 0)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertEqual(self.recorder.messages()[-1], "Rolled 6! Roll again.")


class TestGameOver(TurnMachineTestCase):
    def setUp(self):
        super().setUp()
        for i in range(3):
            self.place(Color.BLUE, i, 56)
        self.place(Color.BLUE, 3, 54)
        self.machine.roll(2)

    def test_win(self):
        self.assertIs(self.state.phase, TurnPhase.GAME_OVER)
        self.assertIs(self.state.winner, Color.BLUE)
        self.assertTrue(self.machine.over)
        self.assertEqual(self.recorder.of_type(GameWon), [GameWon(Color.BLUE)])
        self.assertEqual(self.recorder.messages()[-1], "Blue wins!")

    def test_no_further_turns(self):
        self.assertFalse(self.machine.request_roll())
        self.assertFalse(self.machine.roll(6))
        self.assertFalse(self.machine.select_piece(Color.BLUE, 0))
        self.assertIs(self.state.color, Color.BLUE)

    def test_reset(self):
        self.machine.reset()
        self.assertIs(self.state.phase, TurnPhase.AWAITING_ROLL)
        self.assertIs(self.state.color, Color.BLUE)
        self.assertIsNone(self.state.winner)
        self.assertIsNone(self.machine.game.winner)
        for player in self.machine.game.players:
            self.assertEqual(player.travelled(), [-1, -1, -1, -1])
        self.assertTrue(self.machine.roll(1))


class TestReentrancy(TurnMachineTestCase):
    def test_requests_during_resolution_are_refused(self):
        answers = []

        def impatient(event):
            if isinstance(event, DiceRolled) and event.value:
                answers.append(self.machine.request_roll())
                answers.append(self.machine.select_piece(Color.BLUE, 0))

        self.machine.subscribe(impatient)
        self.machine.roll(6)
        self.assertEqual(answers, [False, False])
        self.assertIs(self.state.phase, TurnPhase.AWAITING_SELECTION)
        self.assertEqual(len(self.recorder.of_type(DiceRolled)), 1)

    def test_reset_during_move_is_refused(self):
        answers = []

        def restless(event):
            if isinstance(event, PieceMoved) and not event.final and not answers:
                answers.append(self.machine.reset())

        self.place(Color.BLUE, 0, 10)
        self.machine.subscribe(restless)
        self.machine.roll(4)
        self.assertEqual(answers, [False])
        self.assertEqual(self.machine.game.player(Color.BLUE).travelled(), [14, -1, -1, -1])
        self.assertIs(self.state.color, Color.RED)
        self.assertTrue(self.machine.reset())
        self.assertEqual(self.machine.game.player(Color.BLUE).travelled(), [-1, -1, -1, -1])
        self.assertIs(self.state.color, Color.BLUE)


if __name__ == "__main__":
    unittest.main()
