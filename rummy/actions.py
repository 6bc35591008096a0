"""Strategy-facing action types and the helpers that apply them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from . import rules
from .cards import Card, format_cards
from .melds import Meld, classify
from .state import GameState


class DrawSource(str, Enum):
    """Where the active player takes their card from."""

    DECK = "deck"
    PACK = "pack"


@dataclass(frozen=True)
class PlayAction:
    """Melds to lay down this round followed by the mandatory discard."""

    discard: Card
    melds: tuple[tuple[Card, ...], ...] = ()

    @property
    def melded_cards(self) -> list[Card]:
        return [card for group in self.melds for card in group]


@dataclass(frozen=True)
class PlayerView:
    """Read-only snapshot handed to a strategy on its turn."""

    player_index: int
    num_players: int
    round_number: int
    hand: tuple[Card, ...]
    melds: tuple[Meld, ...]
    table_melds: tuple[tuple[Meld, ...], ...]
    pack_top: Card | None
    pack_size: int
    deck_size: int


def player_view(game_state: GameState, player_index: int) -> PlayerView:
    player = game_state.players[player_index]
    return PlayerView(
        player_index=player_index,
        num_players=game_state.num_players,
        round_number=game_state.round_number,
        hand=tuple(player.hand),
        melds=tuple(player.melds),
        table_melds=tuple(tuple(other.melds) for other in game_state.players),
        pack_top=game_state.pack.top(),
        pack_size=len(game_state.pack),
        deck_size=len(game_state.deck),
    )


def legal_draw_sources(view: PlayerView) -> list[DrawSource]:
    """Return the draw sources that currently hold cards."""

    sources: list[DrawSource] = []
    if view.deck_size:
        sources.append(DrawSource.DECK)
    if view.pack_size:
        sources.append(DrawSource.PACK)
    return sources


def apply_draw_action(game_state: GameState, player_index: int, source: DrawSource) -> Card:
    """Apply the provided draw using the rules engine."""

    if source is DrawSource.PACK:
        return rules.draw_from_pack(game_state, player_index)
    if source is DrawSource.DECK:
        return rules.draw_from_deck(game_state, player_index)
    raise rules.IllegalDraw(f"unknown draw source {source!r}")


def check_play_action(hand: Sequence[Card], action: PlayAction) -> None:
    """Raise if ``action`` cannot be applied to ``hand`` as a whole.

    Checking up front keeps a rejected play from leaving half of its melds on
    the table.
    """

    held = set(hand)
    used: set[Card] = set()
    for group in action.melds:
        missing = [card for card in group if card not in held]
        if missing:
            raise rules.IllegalMeld(f"cards not present in hand: {format_cards(missing)}")
        reused = [card for card in group if card in used or group.count(card) > 1]
        if reused:
            raise rules.IllegalMeld(f"cards used in more than one meld: {format_cards(reused)}")
        if classify(group) is None:
            raise rules.IllegalMeld(f"cards do not form a meld: {format_cards(group)}")
        used.update(group)
    if action.discard in used:
        raise rules.IllegalDiscard(f"discard {action.discard.label()} was melded")
    if action.discard not in held:
        raise rules.IllegalDiscard(f"card not present in hand: {action.discard.label()}")


def apply_play_action(game_state: GameState, player_index: int, action: PlayAction) -> list[Meld]:
    """Declare every meld in ``action`` and then discard."""

    check_play_action(tuple(game_state.players[player_index].hand), action)
    declared = [rules.declare_meld(game_state, player_index, group) for group in action.melds]
    rules.discard_card(game_state, player_index, action.discard)
    return declared
