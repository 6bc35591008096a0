from __future__ import annotations

import pytest

from rummy.cards import (
    Card,
    Rank,
    Suit,
    format_cards,
    hand_points,
    iter_full_deck,
    parse_card,
    parse_cards,
    sort_cards,
)


def test_full_deck_has_every_rank_and_suit_once() -> None:
    deck = list(iter_full_deck())

    assert len(deck) == 52
    assert len(set(deck)) == 52
    for suit in Suit:
        for rank in Rank:
            assert deck.count(Card(rank, suit)) == 1


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("2C", Card(Rank.TWO, Suit.CLUBS)),
        ("10H", Card(Rank.TEN, Suit.HEARTS)),
        ("AS", Card(Rank.ACE, Suit.SPADES)),
        ("kd", Card(Rank.KING, Suit.DIAMONDS)),
    ],
)
def test_parse_card(code: str, expected: Card) -> None:
    assert parse_card(code) == expected


@pytest.mark.parametrize("code", ["", "Z", "1X", "ZZ", "11H", "AX", "10"])
def test_parse_card_rejects_malformed_tokens(code: str) -> None:
    with pytest.raises(ValueError):
        parse_card(code)


def test_parse_cards_round_trips_codes() -> None:
    cards = parse_cards("AS 10H QD")
    assert [card.code for card in cards] == ["AS", "10H", "QD"]


@pytest.mark.parametrize(
    ("code", "ace_high", "expected"),
    [
        ("AC", False, 5),
        ("AC", True, 15),
        ("5H", False, 5),
        ("10S", False, 5),
        ("JD", False, 10),
        ("QD", True, 10),
        ("KD", False, 10),
    ],
)
def test_card_points(code: str, ace_high: bool, expected: int) -> None:
    assert parse_card(code).points(ace_high=ace_high) == expected


def test_hand_points_uses_ace_low_values() -> None:
    assert hand_points(parse_cards("AC 5H KD")) == 20


def test_rank_ordinals_place_ace_at_both_ends() -> None:
    assert Rank.ACE.ordinal == 0
    assert Rank.KING.ordinal == 12
    assert Rank.ACE.high_ordinal == 13
    assert Rank.TWO.high_ordinal == Rank.TWO.ordinal


def test_sort_cards_orders_by_suit_then_rank() -> None:
    cards = parse_cards("KS 2H AC 10C 3H")
    assert [card.code for card in sort_cards(cards)] == ["AC", "10C", "2H", "3H", "KS"]


def test_labels_use_suit_glyphs() -> None:
    assert parse_card("10H").label() == "10♥"
    assert format_cards(parse_cards("AS 2C")) == "A♠ 2♣"


def test_ranks_order_by_rule_position_not_text() -> None:
    assert Rank.TWO < Rank.TEN
    assert Rank.ACE < Rank.TWO
    assert Rank.KING > Rank.QUEEN >= Rank.QUEEN
    assert sorted([Rank.KING, Rank.TEN, Rank.TWO, Rank.ACE]) == [Rank.ACE, Rank.TWO, Rank.TEN, Rank.KING]
    assert max(Rank) is Rank.KING


def test_cards_order_by_suit_then_rank() -> None:
    assert sorted(parse_cards("KS 2C 10C AD")) == parse_cards("2C 10C AD KS")
    assert parse_card("AC") < parse_card("2C") < parse_card("AD")
    assert parse_card("KS") >= parse_card("KS")
    assert sorted(parse_cards("QH 3H 9C")) == sort_cards(parse_cards("QH 3H 9C"))
