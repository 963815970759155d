"""Shared helpers for the engine test cases."""
import unittest

from courtside.config import Config
from courtside.services import InMemoryRepository, ServiceFactory
from courtside.utils import Clock


class StubClock(Clock):
    """Clock whose time only moves when a test moves it."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> float:
        self.current += seconds
        return self.current


class EngineTestCase(unittest.TestCase):
    """Builds one in-memory engine per test with a two-player roster."""

    def setUp(self) -> None:
        self.clock = StubClock()
        self.repository = InMemoryRepository()
        self.factory = ServiceFactory(Config(data_file=""), repository=self.repository, clock=self.clock)
        self.game_service = self.factory.create_game_service()
        self.player_service = self.factory.create_player_service()
        self.report_service = self.factory.create_report_service()
        self.alice = self.player_service.create_player("Alice", 4)
        self.bob = self.player_service.create_player("Bob", 7)

    def play_game(self, player_id: int, seconds: float):
        """Create and start a game with the player on court for ``seconds``."""
        game = self.game_service.create_game()
        self.game_service.start_game(game.id)
        self.game_service.start_period(game.id)
        self.game_service.sub_on(game.id, player_id)
        self.clock.advance(seconds)
        return game

    def stats_for(self, player_id: int):
        return self.player_service.get_player(player_id).statistics
