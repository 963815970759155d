import unittest

from courtside.errors import AlreadyOn, NotOn
from courtside.models import Game, Period, PeriodStatus
from courtside.services import SubstitutionLedger


class SubstitutionLedgerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ledger = SubstitutionLedger()
        self.period = Period(game_id=1, index=1, status=PeriodStatus.RUNNING, start_ts=0)

    def test_sub_on_opens_interval(self) -> None:
        interval = self.ledger.sub_on(self.period, 10, 5.0)

        self.assertEqual(interval.player_id, 10)
        self.assertEqual(interval.period_id, "1-1")
        self.assertEqual(interval.on_ts, 5.0)
        self.assertIsNone(interval.off_ts)
        self.assertEqual(self.ledger.on_court(self.period), {10})

    def test_sub_on_twice_is_rejected(self) -> None:
        self.ledger.sub_on(self.period, 10, 0)

        with self.assertRaises(AlreadyOn):
            self.ledger.sub_on(self.period, 10, 30)

        self.assertEqual(len(self.period.substitutions), 1)

    def test_sub_off_without_open_interval_is_rejected(self) -> None:
        with self.assertRaises(NotOn):
            self.ledger.sub_off(self.period, 10, 30)

        self.ledger.sub_on(self.period, 10, 0)
        self.ledger.sub_off(self.period, 10, 30)
        with self.assertRaises(NotOn):
            self.ledger.sub_off(self.period, 10, 40)

    def test_elapsed_sums_closed_and_open_intervals(self) -> None:
        self.ledger.sub_on(self.period, 10, 0)
        self.ledger.sub_off(self.period, 10, 100)
        self.ledger.sub_on(self.period, 10, 200)

        self.assertEqual(self.ledger.elapsed_for(self.period, 10, 250), 150)
        self.assertEqual(self.ledger.elapsed_for(self.period, 99, 250), 0)

    def test_elapsed_is_non_decreasing_while_on_court(self) -> None:
        self.ledger.sub_on(self.period, 10, 0)
        readings = [self.ledger.elapsed_for(self.period, 10, t) for t in (0, 10, 10, 60, 300)]

        self.assertEqual(readings, sorted(readings))
        # Reading live time never closes the interval
        self.assertTrue(self.period.substitutions[0].is_open)

    def test_one_appearance_per_on_off_cycle(self) -> None:
        for start in (0, 100, 200):
            self.ledger.sub_on(self.period, 10, start)
            self.ledger.sub_off(self.period, 10, start + 50)
        self.ledger.sub_on(self.period, 10, 300)

        self.assertEqual(self.ledger.appearances_for(self.period, 10), 3)

    def test_close_all_open_closes_every_open_interval(self) -> None:
        self.ledger.sub_on(self.period, 1, 0)
        self.ledger.sub_on(self.period, 2, 100)
        self.ledger.sub_on(self.period, 3, 0)
        self.ledger.sub_off(self.period, 3, 50)

        closed = self.ledger.close_all_open(self.period, 900)

        self.assertEqual(sorted(s.player_id for s in closed), [1, 2])
        self.assertEqual(self.ledger.elapsed_for(self.period, 1, 5000), 900)
        self.assertEqual(self.ledger.elapsed_for(self.period, 2, 5000), 800)
        self.assertEqual(self.ledger.elapsed_for(self.period, 3, 5000), 50)
        self.assertEqual(self.ledger.on_court(self.period), set())

    def test_close_all_open_is_idempotent(self) -> None:
        self.ledger.sub_on(self.period, 1, 0)
        self.ledger.close_all_open(self.period, 100)

        self.assertEqual(self.ledger.close_all_open(self.period, 500), [])
        self.assertEqual(self.period.substitutions[0].off_ts, 100)

    def test_game_totals_merge_periods(self) -> None:
        game = Game(id=1, created_ts=0, started=True)
        second = Period(game_id=1, index=2, status=PeriodStatus.RUNNING, start_ts=1000)
        game.periods = [self.period, second]

        self.ledger.sub_on(self.period, 10, 0)
        self.ledger.sub_off(self.period, 10, 300)
        self.ledger.sub_on(second, 10, 1000)
        self.ledger.sub_off(second, 10, 1200)
        self.ledger.sub_on(second, 11, 1000)

        totals = self.ledger.game_totals(game)
        self.assertEqual(totals[10].seconds, 500)
        self.assertEqual(totals[10].appearances, 2)
        # Open intervals contribute nothing without a reference time
        self.assertEqual(totals[11].seconds, 0)
        self.assertEqual(totals[11].appearances, 0)

        live = self.ledger.game_totals(game, as_of=1100)
        self.assertEqual(live[11].seconds, 100)


if __name__ == "__main__":
    unittest.main()
