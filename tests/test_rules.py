"""Tests covering the rule primitives."""

from __future__ import annotations

from typing import Sequence

import pytest

from rummy import rules, state
from rummy.cards import parse_card, parse_cards
from rummy.melds import Meld


def _state_with_hands(
    hands: Sequence[str],
    *,
    deck: str = "2D 3D 4D",
    pack: str = "9C",
) -> state.GameState:
    config = state.GameConfig(num_players=len(hands), hand_size=3)
    return state.GameState(
        config=config,
        deck=state.Deck(parse_cards(deck)),
        pack=state.Pack(parse_cards(pack)),
        players=[state.PlayerState(hand=state.Hand(parse_cards(codes))) for codes in hands],
        phase=state.GamePhase.ROUND_IN_PROGRESS,
    )


def test_draw_from_deck_takes_top_card() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])

    card = rules.draw_from_deck(game_state, 0)

    assert card == parse_card("4D")
    assert card in game_state.players[0].hand
    assert len(game_state.players[0].hand) == 4
    assert game_state.players[0].phase is state.TurnPhase.AWAITING_PLAY


def test_draw_from_pack_takes_latest_discard() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"], pack="9C 8H")

    assert rules.draw_from_pack(game_state, 0) == parse_card("8H")
    assert game_state.pack.cards == (parse_card("9C"),)


def test_draw_from_empty_pack_is_illegal() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"], pack="")
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_pack(game_state, 0)


def test_draw_out_of_turn_is_illegal() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, 1)


def test_second_draw_in_a_round_is_illegal() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    rules.draw_from_deck(game_state, 0)
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_pack(game_state, 0)


def test_draw_before_deal_is_illegal() -> None:
    game_state = state.new_game_state(state.GameConfig())
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, 0)


def test_declare_meld_moves_cards_out_of_hand() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    rules.draw_from_deck(game_state, 0)

    meld = rules.declare_meld(game_state, 0, parse_cards("4C 2C 3C"))

    player = game_state.players[0]
    assert player.melds == [meld]
    assert player.hand.cards == [parse_card("4D")]
    assert player.melded_cards == parse_cards("2C 3C 4C")


@pytest.mark.parametrize("codes", ["2C 3C 5C", "2C 3C 4D", "2C 3C"])
def test_declare_meld_rejects_bad_groups(codes: str) -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"], deck="5C")
    rules.draw_from_deck(game_state, 0)

    with pytest.raises(rules.IllegalMeld):
        rules.declare_meld(game_state, 0, parse_cards(codes))
    assert len(game_state.players[0].hand) == 4
    assert game_state.players[0].melds == []


def test_declare_meld_before_drawing_is_illegal() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    with pytest.raises(rules.IllegalMeld):
        rules.declare_meld(game_state, 0, parse_cards("2C 3C 4C"))


def test_discard_pushes_onto_pack() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    rules.draw_from_deck(game_state, 0)

    rules.discard_card(game_state, 0, parse_card("2C"))

    assert game_state.pack.top() == parse_card("2C")
    assert len(game_state.players[0].hand) == 3
    assert game_state.players[0].phase is state.TurnPhase.AWAITING_DRAW


def test_discard_requires_card_in_hand_and_a_draw() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"])
    with pytest.raises(rules.IllegalDiscard):
        rules.discard_card(game_state, 0, parse_card("2C"))

    rules.draw_from_deck(game_state, 0)
    with pytest.raises(rules.IllegalDiscard):
        rules.discard_card(game_state, 0, parse_card("KH"))


def test_end_turn_rotates_until_deck_is_empty() -> None:
    game_state = _state_with_hands(["2C 3C 4C", "KH KS KD"], deck="2D")

    assert rules.end_turn(game_state) is False
    assert game_state.turn == 1
    assert game_state.round_number == 1

    game_state.deck.deal()
    assert rules.end_turn(game_state) is True
    assert game_state.turn == 1
    assert game_state.phase is state.GamePhase.FINISHED


def test_deadwood_scoring_excludes_melds() -> None:
    player = state.PlayerState(hand=state.Hand(parse_cards("AC 5H KD")))
    assert rules.deadwood_points(player) == 20


def test_final_scores_breakdown() -> None:
    game_state = _state_with_hands(["AC 5H KD", "2S"], deck="")
    game_state.players[1].melds.append(
        Meld.from_cards(parse_cards("QH QS QD"))
    )
    game_state.phase = state.GamePhase.FINISHED

    scores = rules.final_scores(game_state)

    assert [score.deadwood_points for score in scores] == [20, 5]
    assert [score.won for score in scores] == [False, True]
    assert scores[1].melds_declared == 1
    assert scores[1].melded_points == 30
    assert scores[0].cards_left == 3


def test_final_scores_requires_finished_game() -> None:
    game_state = _state_with_hands(["AC", "2S"])
    with pytest.raises(ValueError):
        rules.final_scores(game_state)


@pytest.mark.parametrize(
    ("scores", "expected"),
    [([20, 5], [1]), ([10, 10, 15], [0, 1]), ([], [])],
)
def test_winners_share_the_lowest_score(scores: list[int], expected: list[int]) -> None:
    assert rules.winners(scores) == expected
