from __future__ import annotations

import pytest

from rummy import scoreboard
from rummy.rules import PlayerScore


def _score(player_index: int, deadwood: int, melded: int, won: bool) -> PlayerScore:
    return PlayerScore(
        player_index=player_index,
        deadwood_points=deadwood,
        cards_left=3,
        melds_declared=1 if melded else 0,
        melded_points=melded,
        won=won,
    )


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory(num_players=2)
    history.record(
        scoreboard.GameSummary(
            game_number=1,
            scores=[_score(0, deadwood=15, melded=30, won=True), _score(1, deadwood=40, melded=0, won=False)],
        )
    )
    history.record(
        scoreboard.GameSummary(
            game_number=2,
            scores=[_score(0, deadwood=25, melded=0, won=False), _score(1, deadwood=10, melded=45, won=True)],
        )
    )

    totals = history.totals()
    assert len(history.games) == 2
    assert [total.wins for total in totals] == [1, 1]
    assert [total.deadwood_points for total in totals] == [40, 50]
    assert [total.melded_points for total in totals] == [30, 45]
    assert all(total.games == 2 for total in totals)
    assert history.games[1].winners == [1]


def test_match_history_validates_player_count() -> None:
    history = scoreboard.MatchHistory(num_players=2)
    summary = scoreboard.GameSummary(game_number=1, scores=[_score(0, deadwood=0, melded=0, won=True)])
    with pytest.raises(ValueError):
        history.record(summary)
    assert history.games == []


def test_match_history_rejects_non_positive_players() -> None:
    with pytest.raises(ValueError):
        scoreboard.MatchHistory(num_players=0)


def test_match_history_rejects_repeated_player_index() -> None:
    history = scoreboard.MatchHistory(num_players=2)
    summary = scoreboard.GameSummary(
        game_number=1,
        scores=[_score(0, deadwood=5, melded=0, won=True), _score(0, deadwood=9, melded=0, won=False)],
    )
    with pytest.raises(ValueError):
        history.record(summary)


def test_totals_mean_deadwood() -> None:
    history = scoreboard.MatchHistory(num_players=2)
    assert [total.mean_deadwood for total in history.totals()] == [0.0, 0.0]
    for number, deadwood in enumerate((10, 20), start=1):
        history.record(
            scoreboard.GameSummary(
                game_number=number,
                scores=[_score(0, deadwood=deadwood, melded=0, won=False), _score(1, deadwood=0, melded=0, won=True)],
            )
        )
    assert history.totals()[0].mean_deadwood == 15.0
    assert history.totals()[1].wins == 2
