"""Results of a series of games and the totals derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .rules import PlayerScore

__all__ = ["GameSummary", "PlayerMatchTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Final scores of one game, one entry per player index."""

    game_number: int
    scores: Sequence[PlayerScore]

    @property
    def winners(self) -> list[int]:
        return [score.player_index for score in self.scores if score.won]


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    player_index: int
    games: int
    wins: int
    deadwood_points: int
    melded_points: int

    @property
    def mean_deadwood(self) -> float:
        return self.deadwood_points / self.games if self.games else 0.0


@dataclass(slots=True)
class MatchHistory:
    """Ordered record of finished games.

    Player indices are whatever the caller records under: seats for a single
    table, strategies for a seat-rotated benchmark.
    """

    num_players: int
    games: list[GameSummary] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ValueError("num_players must be positive")

    def record(self, summary: GameSummary) -> None:
        """Append ``summary``; it must hold exactly one score per player index."""

        indices = sorted(score.player_index for score in summary.scores)
        if indices != list(range(self.num_players)):
            raise ValueError(
                f"expected one score for each of {self.num_players} players, got indices {indices}"
            )
        self.games.append(summary)

    def totals(self) -> list[PlayerMatchTotal]:
        wins = [0] * self.num_players
        deadwood = [0] * self.num_players
        melded = [0] * self.num_players
        for summary in self.games:
            for score in summary.scores:
                deadwood[score.player_index] += score.deadwood_points
                melded[score.player_index] += score.melded_points
                wins[score.player_index] += int(score.won)
        return [
            PlayerMatchTotal(
                player_index=idx,
                games=len(self.games),
                wins=wins[idx],
                deadwood_points=deadwood[idx],
                melded_points=melded[idx],
            )
            for idx in range(self.num_players)
        ]
