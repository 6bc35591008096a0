"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..state import GameState
from .views import StateSummaryView

_SUIT_COLOURS = {
    Suit.SPADES: "cyan",
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
    Suit.CLUBS: "green",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    color = _SUIT_COLOURS.get(card.suit, "white")
    return f"[{color}]{card.label()}[/{color}]"


def format_cards(cards: Iterable[Card]) -> str:
    rendered = [format_card(card) for card in cards]
    return " ".join(rendered) if rendered else "—"


def render_state(
    state: GameState,
    names: Sequence[str],
    *,
    title: str = "Rummy",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = StateSummaryView(state=state, names=names, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
