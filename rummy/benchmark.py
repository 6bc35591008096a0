"""Benchmark harness for comparing strategies over many games."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Sequence

import numpy as np

from . import scoreboard, state
from .game import Game
from .strategies import build_strategy

__all__ = ["StrategyBreakdown", "BenchmarkReport", "run_head_to_head"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StrategyBreakdown:
    """Aggregate statistics collected for a single strategy."""

    name: str
    games: int
    wins: int
    mean_score: float
    std_score: float
    melded_points: int

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0


@dataclass(frozen=True, slots=True)
class BenchmarkReport:
    """Summary of a multi-game benchmark; history is indexed by strategy, not seat."""

    history: scoreboard.MatchHistory
    breakdowns: tuple[StrategyBreakdown, ...]


def run_head_to_head(
    games: int,
    strategy_names: Sequence[str],
    *,
    seed: int = 123,
    hand_size: int = state.DEFAULT_HAND_SIZE,
) -> BenchmarkReport:
    """Play ``games`` games, rotating seats so every strategy opens in turn."""

    if games <= 0:
        raise ValueError("games must be positive")
    num_players = len(strategy_names)
    rng = random.Random(seed)
    history = scoreboard.MatchHistory(num_players=num_players)

    # rows are games, columns are strategies (not seats)
    score_matrix = np.zeros((games, num_players), dtype=np.int64)

    for game_index in range(games):
        offset = game_index % num_players
        seating = [(offset + seat) % num_players for seat in range(num_players)]
        strategies = [build_strategy(strategy_names[idx], seed=rng.randrange(2**32)) for idx in seating]
        config = state.GameConfig(num_players=num_players, hand_size=hand_size)
        game = Game(strategies, config, rng=random.Random(rng.randrange(2**32)))
        game.play()

        by_strategy = [
            replace(score, player_index=seating[score.player_index]) for score in game.final_scores()
        ]
        history.record(scoreboard.GameSummary(game_number=game_index + 1, scores=by_strategy))
        for score in by_strategy:
            score_matrix[game_index, score.player_index] = score.deadwood_points
        logger.debug("game %d finished with scores %s", game_index + 1, game.scores())

    means = score_matrix.mean(axis=0)
    stds = score_matrix.std(axis=0)
    breakdowns = tuple(
        StrategyBreakdown(
            name=strategy_names[total.player_index],
            games=total.games,
            wins=total.wins,
            mean_score=float(means[total.player_index]),
            std_score=float(stds[total.player_index]),
            melded_points=total.melded_points,
        )
        for total in history.totals()
    )
    logger.info("benchmark of %d games complete", games)
    return BenchmarkReport(history=history, breakdowns=breakdowns)
