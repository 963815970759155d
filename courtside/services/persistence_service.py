"""
Persistence for the Courtside substitution tracker.

This module defines the store collaborator used by the engine and two
implementations: an in-memory store and a JSON document file. Both hand out
copies of stored entities, so callers mutate private objects and nothing is
visible to other readers until it is saved.
"""
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from ..errors import GameNotFound, PersistenceFailure, PlayerNotFound
from ..models import Game, Player, PlayerTotals

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class Repository(ABC):
    """Store collaborator for games and roster players."""

    @abstractmethod
    def load_game(self, game_id: int) -> Game:
        """
        Load a game aggregate.

        Raises:
            GameNotFound: If no game has this id
        """

    @abstractmethod
    def save_game(self, game: Game) -> None:
        """
        Replace a stored game aggregate.

        Raises:
            GameNotFound: If the game was never created
        """

    @abstractmethod
    def create_game(self, game: Game) -> None:
        """Store a new game aggregate."""

    @abstractmethod
    def list_games(self) -> List[Game]:
        """All games, newest first."""

    @abstractmethod
    def count_games(self) -> int:
        pass

    @abstractmethod
    def load_player(self, player_id: int) -> Player:
        """
        Load a roster player.

        Raises:
            PlayerNotFound: If no player has this id
        """

    @abstractmethod
    def save_player(self, player: Player) -> None:
        """
        Store a roster edit: the player's name and number.

        Statistics already in the store are kept as they are; only
        :meth:`commit_finalization` changes them.

        Raises:
            PlayerNotFound: If the player was never created
        """

    @abstractmethod
    def create_player(self, name: str, number: int) -> Player:
        """Add a player to the roster and return it with its new id."""

    @abstractmethod
    def list_players(self) -> List[Player]:
        """All players sorted by name, case-insensitive."""

    @abstractmethod
    def commit_finalization(self, game_id: int, totals: Dict[int, PlayerTotals]) -> bool:
        """
        Atomically add one game's totals to its players and mark the game finalized.

        The totals are added to the statistics held by the store at commit
        time, never to a copy read earlier. Acts as a compare-and-set on the
        stored game's ``finalized`` marker: when the stored game is already
        finalized nothing is written.

        Raises:
            GameNotFound: If the game does not exist
            PlayerNotFound: If a player in ``totals`` is not on the roster

        Returns:
            True if the totals were written, False if the game was already finalized
        """


class InMemoryRepository(Repository):
    """
    Store that keeps a JSON-compatible document in memory.

    Each write applies its change to a copy of the document and swaps the
    copy in only after ``_persist`` succeeds.
    """

    def __init__(self, document: Optional[Document] = None):
        self._lock = RLock()
        self._doc: Document = document or self._empty_document()

    @staticmethod
    def _empty_document() -> Document:
        return {"games": {}, "players": {}, "next_player_id": 1}

    # ------------------------------------------------------------------
    # Write plumbing
    # ------------------------------------------------------------------
    def _persist(self, document: Document) -> None:
        """Hook for durable stores; the in-memory store keeps nothing else."""

    def _commit(self, mutate: Callable[[Document], Any]) -> Any:
        with self._lock:
            working = copy.deepcopy(self._doc)
            result = mutate(working)
            self._persist(working)
            self._doc = working
            return result

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------
    def load_game(self, game_id: int) -> Game:
        with self._lock:
            data = self._doc["games"].get(str(game_id))
            if data is None:
                raise GameNotFound(game_id)
            return Game.from_dict(copy.deepcopy(data))

    def save_game(self, game: Game) -> None:
        def mutate(doc: Document) -> None:
            key = str(game.id)
            if key not in doc["games"]:
                raise GameNotFound(game.id)
            doc["games"][key] = game.to_dict()

        self._commit(mutate)

    def create_game(self, game: Game) -> None:
        def mutate(doc: Document) -> None:
            key = str(game.id)
            if key in doc["games"]:
                raise PersistenceFailure(f"Game {game.id} already exists")
            doc["games"][key] = game.to_dict()

        self._commit(mutate)

    def list_games(self) -> List[Game]:
        with self._lock:
            games = [Game.from_dict(copy.deepcopy(g)) for g in self._doc["games"].values()]
        games.sort(key=lambda g: g.id, reverse=True)
        return games

    def count_games(self) -> int:
        with self._lock:
            return len(self._doc["games"])

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------
    def load_player(self, player_id: int) -> Player:
        with self._lock:
            data = self._doc["players"].get(str(player_id))
            if data is None:
                raise PlayerNotFound(player_id)
            return Player.from_dict(copy.deepcopy(data))

    def save_player(self, player: Player) -> None:
        def mutate(doc: Document) -> None:
            stored = doc["players"].get(str(player.id))
            if stored is None:
                raise PlayerNotFound(player.id)
            stored["name"] = player.name
            stored["number"] = player.number

        self._commit(mutate)

    def create_player(self, name: str, number: int) -> Player:
        def mutate(doc: Document) -> Player:
            player = Player(id=int(doc["next_player_id"]), name=name, number=number)
            doc["players"][str(player.id)] = player.to_dict()
            doc["next_player_id"] = player.id + 1
            return player

        return self._commit(mutate)

    def list_players(self) -> List[Player]:
        with self._lock:
            players = [Player.from_dict(copy.deepcopy(p)) for p in self._doc["players"].values()]
        players.sort(key=lambda p: p.name.lower())
        return players

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------
    def commit_finalization(self, game_id: int, totals: Dict[int, PlayerTotals]) -> bool:
        def mutate(doc: Document) -> bool:
            stored_game = doc["games"].get(str(game_id))
            if stored_game is None:
                raise GameNotFound(game_id)
            if stored_game.get("finalized"):
                return False
            for player_id, player_totals in totals.items():
                key = str(player_id)
                if key not in doc["players"]:
                    raise PlayerNotFound(player_id)
                player = Player.from_dict(doc["players"][key])
                player.statistics.add_game(player_totals.seconds, player_totals.appearances)
                doc["players"][key] = player.to_dict()
            stored_game["finalized"] = True
            return True

        return self._commit(mutate)


class JsonFileRepository(InMemoryRepository):
    """
    Store backed by a single JSON file.

    The whole document is rewritten on every change through a temporary file
    and ``os.replace``, so the file on disk always holds either the previous
    or the new state.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(self._load_document(file_path))

    @staticmethod
    def _load_document(file_path: str) -> Document:
        """
        Read the document from disk, or start empty if the file does not exist.

        Raises:
            PersistenceFailure: If the file cannot be read or is not valid JSON
        """
        if not os.path.exists(file_path):
            logger.info("Data file %s not found, starting with an empty store", file_path)
            return InMemoryRepository._empty_document()

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(f"Cannot read data file {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceFailure(f"Data file {file_path} does not contain a JSON object")

        document = InMemoryRepository._empty_document()
        document["games"] = data.get("games", {})
        document["players"] = data.get("players", {})
        next_id = max([int(k) for k in document["players"]] + [0]) + 1
        document["next_player_id"] = max(int(data.get("next_player_id", 1)), next_id)
        logger.info(
            "Loaded %d game(s) and %d player(s) from %s",
            len(document["games"]), len(document["players"]), file_path,
        )
        return document

    def _persist(self, document: Document) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        try:
            if not os.path.exists(directory):
                os.makedirs(directory)
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".courtside-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(temp_path, self.file_path)
            except BaseException:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write data file %s: %s", self.file_path, e)
            raise PersistenceFailure(f"Cannot write data file {self.file_path}: {e}") from e
