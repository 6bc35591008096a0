"""Composable view primitives for the rummy CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..rules import deadwood_points
from ..state import GamePhase, GameState

PACK_PREVIEW = 8


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the current table state."""

    state: GameState
    names: Sequence[str]
    card_formatter: Callable[[Card], str]

    def _cards_markup(self, cards: Sequence[Card]) -> str:
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _pack_markup(self) -> str:
        """Most recent discards first, capped at ``PACK_PREVIEW`` cards."""

        newest_first = list(reversed(self.state.pack.cards))
        shown = self._cards_markup(newest_first[:PACK_PREVIEW])
        hidden = len(newest_first) - PACK_PREVIEW
        if hidden > 0:
            shown += f" [dim](+{hidden} more)[/dim]"
        return shown

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Round[/cyan]: {self.state.round_number}")
        grid.add_row(f"[cyan]Deck[/cyan]: {len(self.state.deck)} card(s)")
        grid.add_row(f"[cyan]Pack[/cyan]: {self._pack_markup()} ({len(self.state.pack)} card(s))")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Player", justify="left", style="bold")
        table.add_column("Strategy", justify="left")
        table.add_column("Hand", justify="left")
        table.add_column("Melds", justify="left")
        table.add_column("Deadwood", justify="right")

        for idx, player in enumerate(self.state.players):
            name = f"P{idx}"
            if idx == self.state.turn and self.state.phase is not GamePhase.FINISHED:
                name = f"[bold yellow]{name}[/bold yellow]"
            strategy = self.names[idx] if idx < len(self.names) else "?"
            melds = " | ".join(self._cards_markup(meld.cards) for meld in player.melds) or "—"
            table.add_row(
                name,
                strategy,
                self._cards_markup(player.hand.cards),
                melds,
                str(deadwood_points(player)),
            )

        return Group(table, self._metadata_panel())
