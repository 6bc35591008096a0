"""Meld validation and the immutable meld value type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Callable, Iterable, Sequence

from .cards import Card, Rank, Suit, format_cards, hand_points

MIN_MELD_SIZE = 3

__all__ = [
    "MIN_MELD_SIZE",
    "MeldKind",
    "InvalidMeld",
    "Meld",
    "is_book",
    "is_run",
    "is_valid",
    "classify",
    "enumerate_melds",
    "CoverResult",
    "best_cover",
]


class MeldKind(str, Enum):
    """The two families of legal melds."""

    BOOK = "book"
    RUN = "run"


class InvalidMeld(ValueError):
    """Raised when constructing a meld from cards that do not form one."""


def _consecutive(values: Sequence[int]) -> bool:
    return all(later - earlier == 1 for earlier, later in zip(values, values[1:]))


def _sequence_fits(cards: Sequence[Card], ordinal: Callable[[Rank], int]) -> bool:
    return _consecutive(sorted(ordinal(card.rank) for card in cards))


def is_book(cards: Sequence[Card]) -> bool:
    """Return ``True`` when every card shares the first card's rank."""

    if len(cards) < MIN_MELD_SIZE:
        return False
    first = cards[0].rank
    return all(card.rank is first for card in cards)


def _ace_low_run(cards: Sequence[Card]) -> bool:
    return _sequence_fits(cards, lambda rank: rank.ordinal)


def _ace_high_run(cards: Sequence[Card]) -> bool:
    return _sequence_fits(cards, lambda rank: rank.high_ordinal)


def is_run(cards: Sequence[Card]) -> bool:
    """Return ``True`` for a same-suit group of consecutive ranks.

    Ace may sit below Two or above King, but a run never wraps through both
    ends (``K A 2`` is rejected).
    """

    if len(cards) < MIN_MELD_SIZE:
        return False
    suit = cards[0].suit
    if any(card.suit is not suit for card in cards):
        return False
    return _ace_low_run(cards) or _ace_high_run(cards)


def is_valid(cards: list[Card]) -> bool:
    """Return whether ``cards`` form a book or a run.

    The list is sorted in place by low-sequence rank as a side effect.
    """

    if len(cards) < MIN_MELD_SIZE:
        return False
    cards.sort(key=lambda card: card.rank.ordinal)
    return is_book(cards) or is_run(cards)


def classify(cards: Iterable[Card]) -> MeldKind | None:
    """Return the kind of meld ``cards`` form, or ``None`` if they do not."""

    candidate = list(cards)
    if is_book(candidate):
        return MeldKind.BOOK
    if is_run(candidate):
        return MeldKind.RUN
    return None


@dataclass(frozen=True, slots=True)
class Meld:
    """A validated book or run that has been declared by a player."""

    kind: MeldKind
    cards: tuple[Card, ...]

    def __post_init__(self) -> None:
        if len(set(self.cards)) != len(self.cards):
            raise InvalidMeld(f"duplicate cards in meld: {format_cards(self.cards)}")
        actual = classify(self.cards)
        if actual is None:
            raise InvalidMeld(f"cards do not form a meld: {format_cards(self.cards)}")
        if actual != self.kind:
            raise InvalidMeld(f"meld kind does not match its cards ({actual.value}): {format_cards(self.cards)}")

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Meld":
        """Sort ``cards`` into meld order and build a meld, raising ``InvalidMeld`` otherwise."""

        candidate = list(cards)
        if not is_valid(candidate):
            raise InvalidMeld(f"cards do not form a meld: {format_cards(candidate)}")
        kind = MeldKind.BOOK if is_book(candidate) else MeldKind.RUN
        if kind is MeldKind.RUN and not _ace_low_run(candidate):
            candidate.sort(key=lambda card: card.rank.high_ordinal)
        return cls(kind=kind, cards=tuple(candidate))

    @property
    def ace_high(self) -> bool:
        """``True`` for runs that only hold with Ace ranked above King."""

        return self.kind is MeldKind.RUN and not _ace_low_run(self.cards)

    @property
    def points(self) -> int:
        return hand_points(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def label(self) -> str:
        return format_cards(self.cards)


def enumerate_melds(cards: Iterable[Card]) -> list[tuple[Card, ...]]:
    """Return every book and run contained in ``cards``.

    Runs are listed for each consecutive window of at least three cards, under
    both ace-low and ace-high ordering.
    """

    pool = sorted(set(cards), key=lambda card: card.sort_key)
    found: dict[frozenset[Card], tuple[Card, ...]] = {}

    by_rank: dict[Rank, list[Card]] = {}
    for card in pool:
        by_rank.setdefault(card.rank, []).append(card)
    for group in by_rank.values():
        for size in range(MIN_MELD_SIZE, len(group) + 1):
            for combo in combinations(group, size):
                found.setdefault(frozenset(combo), combo)

    by_suit: dict[Suit, list[Card]] = {}
    for card in pool:
        by_suit.setdefault(card.suit, []).append(card)
    for group in by_suit.values():
        for ordinal in (lambda rank: rank.ordinal, lambda rank: rank.high_ordinal):
            ordered = sorted(group, key=lambda card: ordinal(card.rank))
            for start in range(len(ordered)):
                for stop in range(start + MIN_MELD_SIZE, len(ordered) + 1):
                    window = tuple(ordered[start:stop])
                    if not _sequence_fits(window, ordinal):
                        break
                    found.setdefault(frozenset(window), window)

    return list(found.values())


@dataclass(frozen=True, slots=True)
class CoverResult:
    """Disjoint melds chosen from a hand together with their coverage."""

    melds: tuple[tuple[Card, ...], ...]
    covered_cards: int
    total_points: int


def best_cover(cards: Iterable[Card]) -> CoverResult:
    """Return the disjoint set of melds covering the most points.

    Ties are broken in favour of covering more cards.
    """

    candidates = enumerate_melds(cards)
    best: tuple[tuple[int, int], tuple[tuple[Card, ...], ...]] = ((0, 0), ())

    def search(start: int, used: frozenset[Card], chosen: tuple[tuple[Card, ...], ...]) -> None:
        nonlocal best
        score = (hand_points(used), len(used))
        if score > best[0]:
            best = (score, chosen)
        for idx in range(start, len(candidates)):
            meld = candidates[idx]
            if used.isdisjoint(meld):
                search(idx + 1, used | frozenset(meld), chosen + (meld,))

    search(0, frozenset(), ())
    (points, covered), melds = best
    return CoverResult(melds=melds, covered_cards=covered, total_points=points)
