"""Core game state data structures for the rummy engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Sequence

from .cards import Card, format_cards, iter_full_deck
from .melds import Meld

DECK_SIZE = 52
DEFAULT_HAND_SIZE = 7


class GamePhase(str, Enum):
    """Lifecycle of a single game."""

    DEALING = "dealing"
    ROUND_IN_PROGRESS = "round_in_progress"
    FINISHED = "finished"


class TurnPhase(str, Enum):
    """Phases that track the active player's progress through a round."""

    AWAITING_DRAW = "awaiting_draw"
    AWAITING_PLAY = "awaiting_play"


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game."""

    num_players: int = 2
    hand_size: int = DEFAULT_HAND_SIZE
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.num_players < 2:
            raise ValueError("at least two players are required")
        if self.hand_size <= 0:
            raise ValueError("hand_size must be positive")
        if self.num_players * self.hand_size + 1 >= DECK_SIZE:
            raise ValueError("not enough cards in the deck for the requested deal")

    @property
    def max_rounds(self) -> int:
        """Upper bound on rounds before the deck is exhausted."""

        return DECK_SIZE - self.num_players * self.hand_size - 1


class Deck:
    """Face-down stock; cards are dealt from the top (end of the list)."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        self._cards: list[Card] = list(iter_full_deck() if cards is None else cards)
        if len(set(self._cards)) != len(self._cards):
            raise ValueError(f"duplicate cards in deck: {format_cards(self._cards)}")

    def shuffle(self, rng: random.Random | None = None) -> None:
        (rng or random.Random()).shuffle(self._cards)

    def deal(self) -> Card | None:
        """Pop the top card, or return ``None`` once the deck is exhausted."""

        if not self._cards:
            return None
        return self._cards.pop()

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


class Pack:
    """Face-up discard pile; only the most recent discard can be taken."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    def push(self, card: Card) -> None:
        self._cards.append(card)

    def top(self) -> Card | None:
        return self._cards[-1] if self._cards else None

    def pop(self) -> Card:
        if not self._cards:
            raise IndexError("pop from empty pack")
        return self._cards.pop()

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


class Hand:
    """Cards held by one player; unordered until ``sort`` is called."""

    __slots__ = ("cards",)

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self.cards: List[Card] = list(cards)

    def add(self, card: Card) -> None:
        self.cards.append(card)

    def remove_at(self, index: int) -> Card:
        return self.cards.pop(index)

    def remove(self, card: Card) -> Card:
        """Remove ``card`` by value, raising ``ValueError`` when it is absent."""

        self.cards.remove(card)
        return card

    def sort(self) -> None:
        self.cards.sort(key=lambda card: card.sort_key)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        return format_cards(self.cards)


@dataclass(slots=True)
class PlayerState:
    """State tracked for each player at the table."""

    hand: Hand = field(default_factory=Hand)
    melds: List[Meld] = field(default_factory=list)
    phase: TurnPhase = TurnPhase.AWAITING_DRAW

    @property
    def melded_cards(self) -> list[Card]:
        return [card for meld in self.melds for card in meld.cards]


@dataclass(slots=True)
class GameState:
    """Mutable table state owned by a single game."""

    config: GameConfig
    deck: Deck = field(default_factory=Deck)
    pack: Pack = field(default_factory=Pack)
    players: List[PlayerState] = field(default_factory=list)
    turn: int = 0
    round_number: int = 0
    phase: GamePhase = GamePhase.DEALING

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def active_player(self) -> PlayerState:
        return self.players[self.turn]


def new_game_state(config: GameConfig, deck: Deck | None = None) -> GameState:
    """Return an undealt state with empty hands for every seat."""

    return GameState(
        config=config,
        deck=deck if deck is not None else Deck(),
        pack=Pack(),
        players=[PlayerState() for _ in range(config.num_players)],
    )


def deal_new_game(
    config: GameConfig,
    rng: random.Random | None = None,
    deck_cards: Sequence[Card] | None = None,
) -> GameState:
    """Shuffle, deal round-robin and seed the pack, returning a playable state.

    When ``deck_cards`` is given it is used as-is (top of deck last) and no
    shuffle takes place.
    """

    if deck_cards is None:
        deck = Deck()
        deck.shuffle(rng if rng is not None else random.Random(config.seed))
    else:
        deck = Deck(deck_cards)

    game_state = new_game_state(config, deck)
    for _ in range(config.hand_size):
        for player in game_state.players:
            card = deck.deal()
            if card is None:
                raise ValueError("insufficient cards in deck for requested hand size")
            player.hand.add(card)

    opening = deck.deal()
    if opening is None:
        raise ValueError("no card left to seed the pack")
    game_state.pack.push(opening)
    if not len(deck):
        raise ValueError("deck exhausted by the opening deal")

    game_state.turn = 0
    game_state.phase = GamePhase.ROUND_IN_PROGRESS
    return game_state
