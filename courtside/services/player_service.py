"""
Player service for the Courtside substitution tracker.

This module provides business logic for managing the roster: creating
players, validating edits, and looking players up. Cumulative statistics are
never edited here; only the statistics aggregator changes them.
"""
import logging
from typing import List, Optional

from ..errors import PlayerValidationError
from ..models import Player
from ..utils import MAX_JERSEY_NUMBER, MAX_NAME_LENGTH, MIN_JERSEY_NUMBER
from .persistence_service import Repository

logger = logging.getLogger(__name__)


class PlayerValidator:
    """Validates roster data before it reaches the store."""

    def validate(self, name: str, number) -> List[str]:
        """
        Validate player data and return list of validation errors.

        Args:
            name: Display name
            number: Jersey number (int or numeric string)

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not name or not str(name).strip():
            errors.append("Player name is required")
        elif len(str(name).strip()) > MAX_NAME_LENGTH:
            errors.append(f"Player name must be at most {MAX_NAME_LENGTH} characters long")

        try:
            value = int(number)
        except (TypeError, ValueError):
            errors.append("Player number must be numeric")
        else:
            if not MIN_JERSEY_NUMBER <= value <= MAX_JERSEY_NUMBER:
                errors.append(
                    f"Player number must be between {MIN_JERSEY_NUMBER} and {MAX_JERSEY_NUMBER}"
                )

        return errors


class PlayerService:
    """
    Service class for managing roster players.

    Players are never deleted; a rename or renumber is visible in every game
    that references the player, past games included.
    """

    def __init__(self, repository: Repository, validator: Optional[PlayerValidator] = None):
        self.repository = repository
        self.validator = validator or PlayerValidator()

    def create_player(self, name: str, number) -> Player:
        """
        Add a new player to the roster.

        Raises:
            PlayerValidationError: If player data is invalid
        """
        self._check(name, number)
        player = self.repository.create_player(name.strip(), int(number))
        logger.info("Player %s created (#%s %s)", player.id, player.number, player.name)
        return player

    def update_player(self, player_id: int, name: Optional[str] = None, number=None) -> Player:
        """
        Rename and/or renumber a player, leaving statistics untouched.

        Raises:
            PlayerNotFound: If the player does not exist
            PlayerValidationError: If the new data is invalid
        """
        player = self.repository.load_player(player_id)
        new_name = player.name if name is None else name
        new_number = player.number if number is None else number
        self._check(new_name, new_number)

        player.name = new_name.strip()
        player.number = int(new_number)
        self.repository.save_player(player)
        logger.info("Player %s updated (#%s %s)", player.id, player.number, player.name)
        return player

    def get_player(self, player_id: int) -> Player:
        return self.repository.load_player(player_id)

    def list_players(self) -> List[Player]:
        return self.repository.list_players()

    def _check(self, name: str, number) -> None:
        errors = self.validator.validate(name, number)
        if errors:
            raise PlayerValidationError(f"Player validation failed: {'; '.join(errors)}")
