"""Rule primitives for the rummy engine: draws, melds, discards and scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .cards import Card, format_cards, hand_points
from .melds import InvalidMeld, Meld
from .state import GamePhase, GameState, PlayerState, TurnPhase

__all__ = [
    "RuleViolation",
    "IllegalDraw",
    "IllegalMeld",
    "IllegalDiscard",
    "GameFinished",
    "PlayerScore",
    "draw_from_deck",
    "draw_from_pack",
    "declare_meld",
    "discard_card",
    "end_turn",
    "deadwood_points",
    "final_scores",
    "winners",
]


class RuleViolation(RuntimeError):
    """Base class for moves that break the game protocol."""


class IllegalDraw(RuleViolation):
    """Raised when a player attempts to draw illegally."""


class IllegalMeld(RuleViolation):
    """Raised when a player declares a meld they cannot make."""


class IllegalDiscard(RuleViolation):
    """Raised when a player attempts to discard illegally."""


class GameFinished(RuleViolation):
    """Raised when play is requested after the game has ended."""


@dataclass(frozen=True, slots=True)
class PlayerScore:
    """Per-player scoring breakdown captured at the end of a game."""

    player_index: int
    deadwood_points: int
    cards_left: int
    melds_declared: int
    melded_points: int
    won: bool


def _require_turn(game_state: GameState, player_index: int, error: type[RuleViolation]) -> PlayerState:
    if game_state.phase is GamePhase.FINISHED:
        raise GameFinished("game already finished")
    if game_state.phase is not GamePhase.ROUND_IN_PROGRESS:
        raise error("cards have not been dealt")
    if player_index < 0 or player_index >= game_state.num_players:
        raise error("invalid player index")
    if game_state.turn != player_index:
        raise error("not this player's turn")
    return game_state.players[player_index]


def _require_draw_phase(game_state: GameState, player_index: int) -> PlayerState:
    player = _require_turn(game_state, player_index, IllegalDraw)
    if player.phase is not TurnPhase.AWAITING_DRAW:
        raise IllegalDraw("player has already drawn this round")
    return player


def draw_from_deck(game_state: GameState, player_index: int) -> Card:
    """Move the top card of the deck into ``player_index``'s hand."""

    player = _require_draw_phase(game_state, player_index)
    card = game_state.deck.deal()
    if card is None:
        raise IllegalDraw("deck is empty")
    player.hand.add(card)
    player.phase = TurnPhase.AWAITING_PLAY
    return card


def draw_from_pack(game_state: GameState, player_index: int) -> Card:
    """Move the most recent discard into ``player_index``'s hand."""

    player = _require_draw_phase(game_state, player_index)
    if not len(game_state.pack):
        raise IllegalDraw("pack is empty")
    card = game_state.pack.pop()
    player.hand.add(card)
    player.phase = TurnPhase.AWAITING_PLAY
    return card


def declare_meld(game_state: GameState, player_index: int, cards: Iterable[Card]) -> Meld:
    """Validate ``cards`` and move them from the hand into a new meld."""

    player = _require_turn(game_state, player_index, IllegalMeld)
    if player.phase is not TurnPhase.AWAITING_PLAY:
        raise IllegalMeld("player must draw before melding")

    candidate = list(cards)
    missing = [card for card in candidate if card not in player.hand]
    if missing:
        raise IllegalMeld(f"cards not present in hand: {format_cards(missing)}")
    try:
        meld = Meld.from_cards(candidate)
    except InvalidMeld as exc:
        raise IllegalMeld(str(exc)) from exc

    for card in meld.cards:
        player.hand.remove(card)
    player.melds.append(meld)
    return meld


def discard_card(game_state: GameState, player_index: int, card: Card) -> None:
    """Move ``card`` from the hand onto the pack, completing the play step."""

    player = _require_turn(game_state, player_index, IllegalDiscard)
    if player.phase is not TurnPhase.AWAITING_PLAY:
        raise IllegalDiscard("player must draw before discarding")
    if card not in player.hand:
        raise IllegalDiscard(f"card not present in hand: {card.label()}")

    player.hand.remove(card)
    game_state.pack.push(card)
    player.phase = TurnPhase.AWAITING_DRAW


def end_turn(game_state: GameState) -> bool:
    """Close the current round; returns ``True`` when the game is over.

    The game ends as soon as the deck is exhausted, leaving ``turn`` on the
    player who emptied it.
    """

    game_state.round_number += 1
    if not len(game_state.deck):
        game_state.phase = GamePhase.FINISHED
        return True
    game_state.turn = (game_state.turn + 1) % game_state.num_players
    return False


def deadwood_points(player: PlayerState) -> int:
    """Score of the cards still held, melded cards excluded."""

    return hand_points(player.hand)


def winners(scores: Sequence[int]) -> list[int]:
    """Indices of every player sharing the lowest score."""

    if not scores:
        return []
    best = min(scores)
    return [idx for idx, score in enumerate(scores) if score == best]


def final_scores(game_state: GameState) -> list[PlayerScore]:
    """Return the end-of-game scoring breakdown for each player."""

    if game_state.phase is not GamePhase.FINISHED:
        raise ValueError("game has not finished")

    totals = [deadwood_points(player) for player in game_state.players]
    best = set(winners(totals))
    return [
        PlayerScore(
            player_index=idx,
            deadwood_points=totals[idx],
            cards_left=len(player.hand),
            melds_declared=len(player.melds),
            melded_points=sum(meld.points for meld in player.melds),
            won=idx in best,
        )
        for idx, player in enumerate(game_state.players)
    ]
