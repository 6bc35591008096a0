"""Turn-based game driver: dealing, rounds and end-of-game scoring."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Sequence

from . import actions, rules, state
from .actions import DrawSource, PlayAction
from .cards import Card
from .melds import Meld
from .strategies import Strategy

__all__ = ["RoundRecord", "Game"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoundRecord:
    """What happened during one player's round."""

    round_number: int
    player_index: int
    source: DrawSource
    drawn: Card
    melds: tuple[Meld, ...]
    discard: Card
    deck_size: int
    pack_size: int
    finished: bool


class Game:
    """Drives a single game from the deal to the final scores.

    The game owns its state and mutates it one round at a time. Strategies are
    trusted to respect the rules: a violation raises out of :meth:`round` and
    the game is not resumed.
    """

    def __init__(
        self,
        strategies: Sequence[Strategy],
        config: state.GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        deck_cards: Sequence[Card] | None = None,
        on_round: Callable[[RoundRecord], None] | None = None,
    ) -> None:
        if config is None:
            config = state.GameConfig(num_players=len(strategies))
        if len(strategies) != config.num_players:
            raise ValueError("one strategy is required per player")
        self.config = config
        self.strategies: List[Strategy] = list(strategies)
        self.history: List[RoundRecord] = []
        self._rng = rng if rng is not None else random.Random(config.seed)
        self._deck_cards = deck_cards
        self._on_round = on_round
        self.state = state.new_game_state(config)

    @property
    def phase(self) -> state.GamePhase:
        return self.state.phase

    @property
    def finished(self) -> bool:
        return self.state.phase is state.GamePhase.FINISHED

    @property
    def turn(self) -> int:
        return self.state.turn

    def deal(self) -> None:
        """Shuffle, deal every hand and seed the pack."""

        if self.state.phase is not state.GamePhase.DEALING:
            raise rules.RuleViolation("cards have already been dealt")
        self.state = state.deal_new_game(self.config, self._rng, self._deck_cards)
        logger.info(
            "dealt %d cards to %d players, %d left in deck",
            self.config.hand_size,
            self.config.num_players,
            len(self.state.deck),
        )

    def round(self) -> RoundRecord:
        """Play one round for the player whose turn it is."""

        if self.state.phase is state.GamePhase.DEALING:
            self.deal()
        if self.finished:
            raise rules.GameFinished("game already finished")

        game_state = self.state
        player_index = game_state.turn
        strategy = self.strategies[player_index]
        player = game_state.players[player_index]

        player.hand.sort()
        source = strategy.choose_draw(actions.player_view(game_state, player_index))
        drawn = actions.apply_draw_action(game_state, player_index, source)
        logger.debug("player %d drew %s from %s", player_index, drawn.label(), source.value)

        play: PlayAction = strategy.choose_play(actions.player_view(game_state, player_index))
        declared = actions.apply_play_action(game_state, player_index, play)
        for meld in declared:
            logger.debug("player %d declared %s %s", player_index, meld.kind.value, meld.label())
        logger.debug("player %d discarded %s", player_index, play.discard.label())

        finished = rules.end_turn(game_state)
        record = RoundRecord(
            round_number=game_state.round_number,
            player_index=player_index,
            source=source,
            drawn=drawn,
            melds=tuple(declared),
            discard=play.discard,
            deck_size=len(game_state.deck),
            pack_size=len(game_state.pack),
            finished=finished,
        )
        self.history.append(record)
        if finished:
            logger.info("deck exhausted after %d rounds; scores %s", game_state.round_number, self.scores())
        if self._on_round is not None:
            self._on_round(record)
        return record

    def play(self) -> list[int]:
        """Run rounds until the deck is exhausted and return the scores."""

        while not self.finished:
            self.round()
        return self.scores()

    def scores(self) -> list[int]:
        """Deadwood total per player; lower is better."""

        if not self.finished:
            raise ValueError("game has not finished")
        return [rules.deadwood_points(player) for player in self.state.players]

    def final_scores(self) -> list[rules.PlayerScore]:
        return rules.final_scores(self.state)

    def winners(self) -> list[int]:
        return rules.winners(self.scores())
