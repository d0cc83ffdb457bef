"""
Interactive Prophecies game for the terminal.

Play a human against the MCTS bot. Moves are typed as ``row col guess``
where guess is a number, or ``X`` to cross the cell out.

Example usage:
    # Standard 4x4 game, human moves first
    prophecies-play

    # Larger grid, stronger bot, bot moves first
    prophecies-play --rows 5 --cols 5 --playouts 8192 --bot-first
"""
import argparse
import logging
from typing import Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from prophecies_ai.core.constants import (
    CROSSED_OUT_SYMBOL, CROSS_OUT_GUESS, DEFAULT_COLS, DEFAULT_PLAYOUTS, DEFAULT_ROWS, PLAYER_COLORS
)
from prophecies_ai.core.game import IllegalMoveError
from prophecies_ai.match import Match
from prophecies_ai.mcts.config import MCTSConfig

console = Console()


def parse_args(argv=None):
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play Prophecies against an MCTS bot")

    # Game configuration
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Number of rows")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Number of columns")
    parser.add_argument("--bot-first", action="store_true", help="Bot moves first")

    # MCTS configuration
    parser.add_argument("--playouts", type=int, default=DEFAULT_PLAYOUTS,
                        help="Number of MCTS playouts per bot move")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Optional time limit per bot move in seconds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    parser.add_argument("--hints", action="store_true",
                        help="Show the bot's estimate of your winning chances")
    parser.add_argument("--debug", action="store_true", help="Show debug information")

    return parser.parse_args(argv)


def render_board(match: Match) -> Table:
    """Build a rich table showing the grid."""
    state = match.state
    table = Table(show_header=True, show_lines=True)
    table.add_column("")
    for col in range(state.ncols):
        table.add_column(str(col), justify="center")

    for row in range(state.nrows):
        cells = [Text(str(row), style="bold")]
        for col in range(state.ncols):
            view = match.get_cell(row, col)
            if view.guess is None:
                cells.append(Text(""))
            elif view.guess == CROSS_OUT_GUESS:
                cells.append(Text(CROSSED_OUT_SYMBOL, style="dim"))
            else:
                cells.append(Text(str(view.guess), style=f"bold {PLAYER_COLORS[view.player]}"))
        table.add_row(*cells)

    return table


def display_game_state(match: Match, human: int) -> None:
    """Print the grid, scores and whose turn it is."""
    console.print(render_board(match))
    scores = match.get_scores()
    console.print(
        f"Scores: [{PLAYER_COLORS[human]}]you {scores[human]}[/] - "
        f"[{PLAYER_COLORS[1 - human]}]bot {scores[1 - human]}[/]"
    )


def parse_move(text: str) -> Optional[Tuple[int, int, int]]:
    """
    Parse ``row col guess`` typed by the human.

    Returns:
        Tuple of (row, col, guess), or None if the input is malformed
    """
    parts = text.split()
    if len(parts) != 3:
        return None
    row, col, guess = parts
    try:
        if guess.upper() == CROSSED_OUT_SYMBOL:
            return int(row), int(col), CROSS_OUT_GUESS
        return int(row), int(col), int(guess)
    except ValueError:
        return None


def human_turn(match: Match) -> bool:
    """
    Ask the human for a move until a legal one is entered.

    Returns:
        False if the human quit, True otherwise
    """
    while True:
        text = console.input("Your move ([bold]row col guess[/], guess X to cross out, q to quit): ")
        if text.strip().lower() in ("q", "quit", "exit"):
            return False

        move = parse_move(text)
        if move is None:
            console.print("[red]Please enter three values, e.g. '0 1 2' or '0 1 X'.[/]")
            continue

        try:
            match.place(*move)
            return True
        except IllegalMoveError as e:
            console.print(f"[red]Illegal move:[/] {e.reason.message}")


def bot_turn(match: Match) -> None:
    """Let the bot pick and play a move."""
    with console.status("Bot is thinking..."):
        edge = match.play_bot_move()
    if edge is not None:
        console.print(
            f"Bot plays [bold]{edge.action}[/] "
            f"({edge.visits} visits, {edge.win_probability:.1%} confidence)"
        )


def show_hint(match: Match) -> None:
    """Print the bot's estimate of the human's chances."""
    edge = match.get_best_action()
    if edge is not None:
        console.print(f"The bot thinks you have a {edge.win_probability:.1%} chance of winning.")


def main(argv=None):
    """Run an interactive game."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    config = MCTSConfig(playouts=args.playouts, time_limit=args.time_limit, seed=args.seed)
    bot_player = 0 if args.bot_first else 1
    human = 1 - bot_player
    match = Match(args.rows, args.cols, bot_player=bot_player, config=config)

    console.print(f"[bold]Prophecies[/] on a {args.rows}x{args.cols} grid. "
                  f"You are [{PLAYER_COLORS[human]}]player {human}[/].")

    while not match.is_finished():
        display_game_state(match, human)
        if match.get_active_player() == bot_player:
            bot_turn(match)
            continue

        if args.hints:
            show_hint(match)
        if not human_turn(match):
            console.print("Goodbye!")
            return

    display_game_state(match, human)
    winner = match.winner()
    if winner is None:
        console.print("[bold]Draw![/]")
    elif winner == human:
        console.print("[bold green]You win![/]")
    else:
        console.print("[bold red]The bot wins.[/]")


if __name__ == "__main__":
    main()
