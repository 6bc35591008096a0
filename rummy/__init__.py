"""Top-level package for the rummy game engine."""

from . import actions, cards, game, melds, rules, state, strategies

__all__ = [
    "actions",
    "cards",
    "game",
    "melds",
    "rules",
    "state",
    "strategies",
]
