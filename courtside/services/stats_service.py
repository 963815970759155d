"""Statistics aggregator: fold finished games into career totals exactly once."""

import logging
from typing import Dict, Optional

from ..errors import PlayerNotFound
from ..models import PlayerTotals
from .ledger import SubstitutionLedger
from .persistence_service import Repository

logger = logging.getLogger(__name__)


class StatsService:
    """
    Add each finished game's playing time to the roster's cumulative figures.

    The game id is the idempotency key: the game's ``finalized`` marker and
    the players' additions are written in one repository call, so a retried or
    duplicated finalize never counts a game twice.
    """

    def __init__(self, repository: Repository, ledger: Optional[SubstitutionLedger] = None):
        self.repository = repository
        self.ledger = ledger or SubstitutionLedger()

    def finalize(self, game_id: int, totals: Dict[int, PlayerTotals]) -> bool:
        """
        Fold one game's per-player totals into the roster.

        Args:
            game_id: Game whose numbers are being folded in
            totals: Playing time and appearances per player id

        Returns:
            True if totals were applied, False if the game was already finalized
        """
        game = self.repository.load_game(game_id)
        if game.finalized:
            logger.info("Game %s already finalized, skipping", game_id)
            return False

        participants: Dict[int, PlayerTotals] = {}
        for player_id, player_totals in sorted(totals.items()):
            if not player_totals.participated:
                continue
            try:
                self.repository.load_player(player_id)
            except PlayerNotFound:
                logger.warning("Game %s: player %s not on roster, statistics skipped", game_id, player_id)
                continue
            participants[player_id] = player_totals

        applied = self.repository.commit_finalization(game_id, participants)
        if applied:
            logger.info("Game %s finalized for %d player(s)", game_id, len(participants))
        else:
            logger.info("Game %s was finalized concurrently, skipping", game_id)
        return applied

    def finalize_game(self, game_id: int) -> bool:
        """Finalize a game using the totals recorded in its own ledger."""
        game = self.repository.load_game(game_id)
        return self.finalize(game_id, self.ledger.game_totals(game))
