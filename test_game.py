import unittest

from game import (
    EMPTY,
    CellOccupiedError,
    ManualTicker,
    RoundEngine,
    find_winner,
    new_engine,
    pretty,
)


class TestTicTacBasics(unittest.TestCase):
    def test_new_engine_starts_first_round(self):
        engine = new_engine()
        self.assertTrue(engine.is_active)
        self.assertEqual(engine.round_number, 1)
        self.assertEqual(engine.active_player, 1)
        self.assertEqual(engine.time_remaining, 180)

    def test_top_row_win_credits_player_one(self):
        engine = new_engine()
        engine.apply_move(0, 0)   # player 1
        engine.apply_move(1, 1)   # player 2
        engine.apply_move(1, 0)   # player 1
        engine.apply_move(2, 2)   # player 2
        before = engine.grid
        self.assertIsNone(find_winner(before))
        outcome = engine.apply_move(2, 0)
        self.assertEqual(outcome.winner, 1)
        self.assertEqual(engine.score_of(1), 1)
        self.assertEqual(engine.score_of(2), 0)

    def test_occupied_cell_keeps_turn(self):
        engine = new_engine()
        engine.apply_move(0, 0)
        with self.assertRaises(CellOccupiedError):
            engine.apply_move(0, 0)
        self.assertEqual(engine.grid.at(0, 0), 1)
        self.assertEqual(engine.active_player, 2)

    def test_timeout_restarts_with_full_clock(self):
        ticker = ManualTicker()
        engine = RoundEngine(countdown=ticker)
        engine.start_round()
        ticker.tick(180)
        self.assertEqual(engine.scores(), {1: 0, 2: 0})
        self.assertEqual(engine.round_number, 2)
        self.assertEqual(engine.time_remaining, 180)
        self.assertTrue(all(c == EMPTY for c in engine.grid.cells))

    def test_pretty_shows_marks(self):
        engine = new_engine()
        engine.apply_move(0, 0)
        engine.apply_move(2, 2)
        self.assertEqual(pretty(engine.snapshot().grid), "O . .\n. . .\n. . X")


if __name__ == '__main__':
    unittest.main()
