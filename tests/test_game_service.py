"""
Unit tests for GameService.

Covers the game lifecycle, the end-of-game force close and the single fold
of playing time into the roster.
"""
import threading
import unittest

from courtside.errors import (
    AlreadyEnded, AlreadyOn, AlreadyStarted, GameNotFound, GameNotStarted,
    NotStarted, PeriodAlreadyRunning, PeriodNotRunning, PlayerNotFound,
)
from courtside.models import PeriodStatus

from .support import EngineTestCase


class GameLifecycleTests(EngineTestCase):
    def test_example_match_folds_playing_time_into_roster(self) -> None:
        game = self.game_service.create_game()
        self.game_service.start_game(game.id)
        self.game_service.start_period(game.id)

        t0 = self.clock.now()
        self.game_service.sub_on(game.id, self.alice.id)
        self.game_service.sub_on(game.id, self.bob.id)
        self.clock.advance(600)
        self.game_service.sub_off(game.id, self.alice.id)
        self.clock.advance(300)
        stopped = self.game_service.stop_period(game.id)

        period = stopped.periods[0]
        durations = {s.player_id: s.duration() for s in period.substitutions}
        self.assertEqual(durations, {self.alice.id: 600, self.bob.id: 900})
        self.assertEqual(period.end_ts, t0 + 900)
        self.assertEqual(self.game_service.ledger.appearances_for(period, self.alice.id), 1)
        self.assertEqual(self.game_service.ledger.appearances_for(period, self.bob.id), 1)

        ended = self.game_service.end_game(game.id)
        self.assertTrue(ended.ended and ended.finalized)

        alice_stats = self.stats_for(self.alice.id)
        bob_stats = self.stats_for(self.bob.id)
        self.assertEqual(
            (alice_stats.games_played, alice_stats.total_seconds, alice_stats.total_appearances), (1, 600, 1)
        )
        self.assertEqual(
            (bob_stats.games_played, bob_stats.total_seconds, bob_stats.total_appearances), (1, 900, 1)
        )

    def test_end_game_twice_does_not_double_count(self) -> None:
        game = self.play_game(self.alice.id, 120)
        self.game_service.end_game(game.id)

        with self.assertRaises(AlreadyEnded):
            self.game_service.end_game(game.id)

        stats = self.stats_for(self.alice.id)
        self.assertEqual(stats.games_played, 1)
        self.assertEqual(stats.total_seconds, 120)

    def test_end_game_force_closes_running_period(self) -> None:
        game = self.play_game(self.alice.id, 60)
        self.game_service.sub_on(game.id, self.bob.id)
        self.clock.advance(60)

        ended = self.game_service.end_game(game.id)

        self.assertTrue(all(p.status is PeriodStatus.STOPPED for p in ended.periods))
        self.assertTrue(all(s.off_ts == self.clock.now() for p in ended.periods for s in p.substitutions))
        self.assertEqual(ended.end_ts, self.clock.now())
        self.assertEqual(ended.state, "finished")

    def test_end_game_after_stopped_periods(self) -> None:
        game = self.play_game(self.alice.id, 60)
        self.game_service.stop_period(game.id)
        self.clock.advance(30)

        ended = self.game_service.end_game(game.id)

        self.assertEqual(ended.periods[0].end_ts, self.clock.now() - 30)
        self.assertEqual(self.stats_for(self.alice.id).total_seconds, 60)

    def test_end_game_requires_started_game(self) -> None:
        game = self.game_service.create_game()
        with self.assertRaises(NotStarted):
            self.game_service.end_game(game.id)

    def test_game_starts_only_once(self) -> None:
        game = self.game_service.create_game()
        started = self.game_service.start_game(game.id)
        self.assertEqual(started.start_ts, self.clock.now())
        self.assertEqual(started.periods, [])

        with self.assertRaises(AlreadyStarted):
            self.game_service.start_game(game.id)

        self.game_service.end_game(game.id)
        with self.assertRaises(AlreadyStarted):
            self.game_service.start_game(game.id)

    def test_games_are_numbered_and_listed_newest_first(self) -> None:
        ids = [self.game_service.create_game().id for _ in range(3)]
        self.assertEqual(ids, [1, 2, 3])
        self.assertEqual([g.id for g in self.game_service.list_games()], [3, 2, 1])


class PeriodAndSubstitutionTests(EngineTestCase):
    def test_periods_rejected_outside_started_game(self) -> None:
        game = self.game_service.create_game()
        with self.assertRaises(GameNotStarted):
            self.game_service.start_period(game.id)

        self.game_service.start_game(game.id)
        self.game_service.end_game(game.id)
        with self.assertRaises(GameNotStarted):
            self.game_service.start_period(game.id)

    def test_only_one_running_period(self) -> None:
        game = self.game_service.create_game()
        self.game_service.start_game(game.id)
        self.game_service.start_period(game.id)

        with self.assertRaises(PeriodAlreadyRunning):
            self.game_service.start_period(game.id)

        stored = self.game_service.get_game(game.id)
        self.assertEqual(len(stored.periods), 1)
        self.assertTrue(stored.periods[0].running)

        self.clock.advance(600)
        self.game_service.stop_period(game.id)
        second = self.game_service.start_period(game.id)
        self.assertEqual([p.index for p in second.periods], [1, 2])
        self.assertEqual(second.state, "in_progress")

    def test_substitutions_need_running_period(self) -> None:
        game = self.game_service.create_game()
        self.game_service.start_game(game.id)

        with self.assertRaises(PeriodNotRunning):
            self.game_service.sub_on(game.id, self.alice.id)

        self.game_service.start_period(game.id)
        self.game_service.sub_on(game.id, self.alice.id)
        with self.assertRaises(AlreadyOn):
            self.game_service.sub_on(game.id, self.alice.id)

    def test_unknown_ids_are_not_found(self) -> None:
        with self.assertRaises(GameNotFound):
            self.game_service.start_game(42)
        with self.assertRaises(GameNotFound):
            self.game_service.sub_on(42, self.alice.id)

        game = self.game_service.create_game()
        self.game_service.start_game(game.id)
        self.game_service.start_period(game.id)
        with self.assertRaises(PlayerNotFound):
            self.game_service.sub_on(game.id, 999)
        with self.assertRaises(PlayerNotFound):
            self.game_service.set_mvp(game.id, 999)

    def test_set_mvp_in_any_state(self) -> None:
        game = self.game_service.create_game()
        self.assertEqual(self.game_service.set_mvp(game.id, self.alice.id).mvp_player_id, self.alice.id)

        self.game_service.start_game(game.id)
        self.game_service.end_game(game.id)
        updated = self.game_service.set_mvp(game.id, self.bob.id)

        self.assertEqual(updated.mvp_player_id, self.bob.id)
        self.assertEqual(self.game_service.get_game(game.id).mvp_player_id, self.bob.id)

    def test_elapsed_for_reports_live_time(self) -> None:
        game = self.play_game(self.alice.id, 45)
        self.assertEqual(self.game_service.elapsed_for(game.id, self.alice.id), 45)
        self.clock.advance(15)
        self.assertEqual(self.game_service.elapsed_for(game.id, self.alice.id), 60)

        # Live reads never persist an end time
        self.assertIsNone(self.game_service.get_game(game.id).periods[0].substitutions[0].off_ts)


class ConcurrentEndTests(EngineTestCase):
    def test_concurrent_end_requests_apply_once(self) -> None:
        game = self.play_game(self.alice.id, 300)

        barrier = threading.Barrier(4)
        outcomes = []
        outcomes_lock = threading.Lock()

        def end_game():
            barrier.wait()
            try:
                self.game_service.end_game(game.id)
                result = "ended"
            except AlreadyEnded:
                result = "already_ended"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=end_game) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        self.assertEqual(sorted(outcomes), ["already_ended"] * 3 + ["ended"])
        stats = self.stats_for(self.alice.id)
        self.assertEqual(stats.games_played, 1)
        self.assertEqual(stats.total_seconds, 300)


if __name__ == "__main__":
    unittest.main()
