"""Player strategy interface and the built-in strategies."""

from __future__ import annotations

import random
from typing import Callable, Dict, Protocol

from .actions import DrawSource, PlayAction, PlayerView, legal_draw_sources
from .cards import hand_points
from .melds import best_cover

__all__ = [
    "Strategy",
    "FirstCardStrategy",
    "RandomStrategy",
    "GreedyStrategy",
    "STRATEGY_REGISTRY",
    "build_strategy",
]


class Strategy(Protocol):
    """Decision points invoked once per round for the active player."""

    name: str

    def choose_draw(self, view: PlayerView) -> DrawSource:
        """Pick where to draw from; ``view.hand`` has not grown yet."""
        ...

    def choose_play(self, view: PlayerView) -> PlayAction:
        """Pick melds to lay down and the card to discard from ``view.hand``."""
        ...


class FirstCardStrategy:
    """Always draws blind and discards the lowest-index card."""

    name = "first-card"

    def choose_draw(self, view: PlayerView) -> DrawSource:
        return DrawSource.DECK

    def choose_play(self, view: PlayerView) -> PlayAction:
        return PlayAction(discard=view.hand[0])


class RandomStrategy:
    """Seeded random draws and discards; never melds."""

    name = "random"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def choose_draw(self, view: PlayerView) -> DrawSource:
        return self._rng.choice(legal_draw_sources(view))

    def choose_play(self, view: PlayerView) -> PlayAction:
        return PlayAction(discard=self._rng.choice(view.hand))


class GreedyStrategy:
    """Takes the pack top when it improves the hand's melds, lays down all it can."""

    name = "greedy"

    def choose_draw(self, view: PlayerView) -> DrawSource:
        top = view.pack_top
        if top is None:
            return DrawSource.DECK
        current = best_cover(view.hand)
        with_top = best_cover(view.hand + (top,))
        if with_top.total_points > current.total_points:
            return DrawSource.PACK
        return DrawSource.DECK

    def choose_play(self, view: PlayerView) -> PlayAction:
        best: tuple[tuple[int, int], PlayAction] | None = None
        for discard in view.hand:
            remaining = [card for card in view.hand if card != discard]
            cover = best_cover(remaining)
            deadwood = hand_points(remaining) - cover.total_points
            # lower deadwood first, then shed the most expensive card
            key = (deadwood, -discard.points())
            if best is None or key < best[0]:
                best = (key, PlayAction(discard=discard, melds=cover.melds))
        if best is None:
            raise ValueError("cannot play from an empty hand")
        return best[1]


STRATEGY_REGISTRY: Dict[str, Callable[[int | None], Strategy]] = {
    FirstCardStrategy.name: lambda seed: FirstCardStrategy(),
    RandomStrategy.name: lambda seed: RandomStrategy(seed),
    GreedyStrategy.name: lambda seed: GreedyStrategy(),
}


def build_strategy(name: str, seed: int | None = None) -> Strategy:
    """Instantiate a registered strategy by name."""

    try:
        factory = STRATEGY_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(STRATEGY_REGISTRY))
        raise ValueError(f"unknown strategy '{name}' (expected one of: {known})") from None
    return factory(seed)
