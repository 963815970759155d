"""
Player model for the Courtside substitution tracker.

This module contains the Player dataclass which represents a roster entry
and its cumulative career statistics.
"""
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class PlayerStats:
    """Cumulative statistics folded in from finished games."""
    total_seconds: float = 0.0
    total_appearances: int = 0
    games_played: int = 0

    def add_game(self, seconds: float, appearances: int) -> None:
        """
        Fold one finished game's numbers into the running totals.

        Args:
            seconds: Playing time in the game
            appearances: Number of on/off cycles in the game
        """
        self.total_seconds += max(0.0, seconds)
        self.total_appearances += max(0, appearances)
        self.games_played += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_seconds": self.total_seconds,
            "total_appearances": self.total_appearances,
            "games_played": self.games_played,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            total_seconds=float(data.get("total_seconds", 0.0)),
            total_appearances=int(data.get("total_appearances", 0)),
            games_played=int(data.get("games_played", 0)),
        )


@dataclass
class Player:
    """
    Represents a team member on the roster.

    Games reference players by id, so a rename or renumber shows up in the
    display of past games as well.

    Attributes:
        id: Unique identifier assigned by the store
        name: Display name
        number: Jersey number
        statistics: Cumulative playing time, appearances and games played
    """
    id: int
    name: str
    number: int = 0
    statistics: PlayerStats = field(default_factory=PlayerStats)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        return cls(
            id=int(data["id"]),
            name=data["name"],
            number=int(data.get("number", 0)),
            statistics=PlayerStats.from_dict(data.get("statistics")),
        )
