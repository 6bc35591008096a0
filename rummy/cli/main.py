"""Typer entry-point wiring for the rummy CLI."""

from __future__ import annotations

import logging
from typing import List, Sequence

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import benchmark, rules, state
from ..game import Game, RoundRecord
from ..strategies import STRATEGY_REGISTRY, build_strategy
from .render import format_card, format_cards, render_state

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

DEFAULT_STRATEGY = "first-card"


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _resolve_strategy_names(names: Sequence[str] | None, players: int) -> list[str]:
    """Return one strategy name per seat, repeating the last one given."""

    chosen = list(names or [DEFAULT_STRATEGY])
    if len(chosen) > players:
        raise typer.BadParameter("more strategies than players")
    for name in chosen:
        if name not in STRATEGY_REGISTRY:
            known = ", ".join(sorted(STRATEGY_REGISTRY))
            raise typer.BadParameter(f"unknown strategy '{name}' (expected one of: {known})")
    chosen.extend([chosen[-1]] * (players - len(chosen)))
    return chosen


def _describe_round(record: RoundRecord) -> str:
    parts = [f"[bold]Round {record.round_number}[/bold] P{record.player_index}"]
    parts.append(f"drew {format_card(record.drawn)} from {record.source.value}")
    for meld in record.melds:
        parts.append(f"melded {meld.kind.value} {format_cards(meld.cards)}")
    parts.append(f"discarded {format_card(record.discard)}")
    parts.append(f"[dim](deck {record.deck_size}, pack {record.pack_size})[/dim]")
    return " • ".join(parts)


def _render_scores(game: Game, names: Sequence[str]) -> Table:
    """Return a Rich table describing the outcome of a game."""

    table = Table(title="Final Scores", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Strategy", justify="center")
    table.add_column("Result", justify="center")
    table.add_column("Cards Left", justify="right")
    table.add_column("Melds", justify="right")
    table.add_column("Deadwood", justify="right")

    for entry in game.final_scores():
        label = f"P{entry.player_index}"
        result = "Loss"
        if entry.won:
            label = f"[bold green]{label}[/bold green]"
            result = "[bold green]Win[/bold green]"
        table.add_row(
            label,
            names[entry.player_index],
            result,
            str(entry.cards_left),
            str(entry.melds_declared),
            str(entry.deadwood_points),
        )
    return table


@app.command()
def play(
    players: int = typer.Option(2, min=2, max=7, help="Number of seated players."),
    hand_size: int = typer.Option(state.DEFAULT_HAND_SIZE, min=1, help="Cards dealt to each player."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    strategy: List[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Strategy per seat, in seating order; the last one fills the remaining seats.",
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Only print the final scores."),
    verbose: bool = typer.Option(False, "--verbose", help="Emit debug logging for every move."),
) -> None:
    """Play a single game and narrate it round by round."""

    _configure_logging(verbose)
    names = _resolve_strategy_names(strategy, players)
    try:
        config = state.GameConfig(num_players=players, hand_size=hand_size, seed=seed)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    strategies = [
        build_strategy(name, seed=None if seed is None else seed + idx) for idx, name in enumerate(names)
    ]

    def narrate(record: RoundRecord) -> None:
        console.print(_describe_round(record))
        console.print(render_state(game.state, names, title=f"After round {record.round_number}"))

    game = Game(strategies, config, on_round=None if quiet else narrate)
    try:
        game.play()
    except rules.RuleViolation as exc:
        console.print(f"[bold red]Rule violation:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(_render_scores(game, names))


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(100, min=1, help="Number of games to simulate."),
    strategy: List[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Strategies to compare (one seat each); defaults to greedy vs first-card.",
    ),
    hand_size: int = typer.Option(state.DEFAULT_HAND_SIZE, min=1, help="Cards dealt to each player."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    verbose: bool = typer.Option(False, "--verbose", help="Emit debug logging for every game."),
) -> None:
    """Run many games and compare strategies."""

    _configure_logging(verbose)
    names = list(strategy) if strategy else ["greedy", DEFAULT_STRATEGY]
    names = _resolve_strategy_names(names, len(names))
    if len(names) < 2:
        raise typer.BadParameter("at least two strategies are required")

    try:
        report = benchmark.run_head_to_head(games, names, seed=seed, hand_size=hand_size)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = Table(title="Strategy Benchmark", box=box.SIMPLE_HEAVY)
    table.add_column("Strategy", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Mean Score", justify="right")
    table.add_column("Std Dev", justify="right")
    table.add_column("Melded Pts", justify="right")

    for row in report.breakdowns:
        table.add_row(
            row.name,
            str(row.wins),
            f"{row.win_rate:.1%}",
            f"{row.mean_score:.2f}",
            f"{row.std_score:.2f}",
            str(row.melded_points),
        )

    console.print(table)
    console.print(f"[cyan]{len(report.history.games)} game(s) simulated.[/cyan]")


def main() -> None:
    """Entry-point for ``python -m rummy.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
