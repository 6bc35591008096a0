"""Card abstractions and helpers for the rummy engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Final, Iterable, Iterator

ACE_HIGH_ORDINAL: Final[int] = 13


class Suit(str, Enum):
    """Enumeration of the four suits in a standard deck."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    @classmethod
    def ordered(cls) -> tuple["Suit", ...]:
        """Return suits in deck construction order."""

        return (cls.CLUBS, cls.DIAMONDS, cls.HEARTS, cls.SPADES)

    @property
    def ordinal(self) -> int:
        return _SUIT_INDEX[self]

    @property
    def glyph(self) -> str:
        return _SUIT_GLYPHS[self]


class Rank(str, Enum):
    """Enumeration of ranks ordered from Ace (low) to King."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks in rule order for sorting and run validation."""

        return (
            cls.ACE,
            cls.TWO,
            cls.THREE,
            cls.FOUR,
            cls.FIVE,
            cls.SIX,
            cls.SEVEN,
            cls.EIGHT,
            cls.NINE,
            cls.TEN,
            cls.JACK,
            cls.QUEEN,
            cls.KING,
        )

    @property
    def ordinal(self) -> int:
        """Low-sequence value: Ace=0 .. King=12."""

        return _RANK_INDEX[self]

    @property
    def high_ordinal(self) -> int:
        """High-sequence value: as ``ordinal`` but with Ace after King."""

        if self is Rank.ACE:
            return ACE_HIGH_ORDINAL
        return _RANK_INDEX[self]

    @property
    def is_face(self) -> bool:
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    # str comparison would put "10" before "2"; compare by rule order instead
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.ordinal >= other.ordinal


_SUIT_INDEX: Final[dict[Suit, int]] = {suit: idx for idx, suit in enumerate(Suit.ordered())}
_RANK_INDEX: Final[dict[Rank, int]] = {rank: idx for idx, rank in enumerate(Rank.ordered())}
_SUIT_GLYPHS: Final[dict[Suit, str]] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

FACE_POINTS: Final[int] = 10
ACE_HIGH_POINTS: Final[int] = 15
PIP_POINTS: Final[int] = 5


@total_ordering
@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical playing card."""

    rank: Rank
    suit: Suit

    @property
    def sort_key(self) -> tuple[int, int]:
        """Canonical hand order: suit first, then rank."""

        return (self.suit.ordinal, self.rank.ordinal)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key < other.sort_key

    def points(self, ace_high: bool = False) -> int:
        """Return the scoring value of the card."""

        if self.rank is Rank.ACE:
            return ACE_HIGH_POINTS if ace_high else PIP_POINTS
        if self.rank.is_face:
            return FACE_POINTS
        return PIP_POINTS

    @property
    def code(self) -> str:
        """Parser-compatible text form, e.g. ``10H``."""

        return f"{self.rank.value}{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        return f"{self.rank.value}{self.suit.glyph}"

    def __str__(self) -> str:
        return self.label()


def iter_full_deck() -> Iterator[Card]:
    """Yield all 52 cards of a fresh deck, suit-major."""

    for suit in Suit.ordered():
        for rank in Rank.ordered():
            yield Card(rank=rank, suit=suit)


_RANK_BY_TOKEN: Final[dict[str, Rank]] = {rank.value: rank for rank in Rank}
_SUIT_BY_TOKEN: Final[dict[str, Suit]] = {suit.value: suit for suit in Suit}


def parse_card(code: str) -> Card:
    """Parse a ``<Rank><Suit>`` token such as ``2C``, ``10H`` or ``AS``."""

    token = code.strip().upper()
    if len(token) < 2:
        raise ValueError(f"invalid card code '{code}'")
    rank_token, suit_token = token[:-1], token[-1]
    rank = _RANK_BY_TOKEN.get(rank_token)
    if rank is None:
        raise ValueError(f"invalid card rank in '{code}'")
    suit = _SUIT_BY_TOKEN.get(suit_token)
    if suit is None:
        raise ValueError(f"invalid card suit in '{code}'")
    return Card(rank=rank, suit=suit)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace separated list of card codes."""

    return [parse_card(token) for token in text.split()]


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda card: card.sort_key)


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(card.label() for card in cards)


def hand_points(cards: Iterable[Card]) -> int:
    """Return the ace-low scoring total of ``cards``."""

    return sum(card.points() for card in cards)
