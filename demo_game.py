#!/usr/bin/env python
"""
Demonstration of Prophecies bots playing against each other.

This script plays a series of games between two players, each either an
MCTS bot or a uniformly random player, and reports win rates and scores.

Example usage:
    # MCTS against a random player on a 4x4 grid
    python demo_game.py --player1 mcts --player2 random --games 20

    # Two MCTS bots with different budgets, printing every move
    python demo_game.py --player1 mcts --player2 mcts --playouts1 512 --playouts2 2048 --verbose
"""
import argparse
import logging
import random
from typing import Dict, List, Optional

import numpy as np
from tqdm import tqdm

from prophecies_ai.core.game import GameState
from prophecies_ai.core.actions import Action
from prophecies_ai.core.constants import DEFAULT_ROWS, DEFAULT_COLS
from prophecies_ai.mcts.agent import MCTSBot
from prophecies_ai.mcts.config import MCTSConfig


def parse_args():
    """Parse command-line arguments for demo configuration."""
    parser = argparse.ArgumentParser(description="Demonstrate Prophecies bots playing against each other")

    # Player configuration
    parser.add_argument("--player1", type=str, default="mcts", choices=["random", "mcts"],
                        help="Type of the first player (moves first)")
    parser.add_argument("--player2", type=str, default="random", choices=["random", "mcts"],
                        help="Type of the second player")
    parser.add_argument("--playouts1", type=int, default=512,
                        help="MCTS playouts per move for the first player")
    parser.add_argument("--playouts2", type=int, default=512,
                        help="MCTS playouts per move for the second player")

    # Demo configuration
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Number of rows")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Number of columns")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", action="store_true",
                        help="Show every move and the final board of each game")

    return parser.parse_args()


class RandomPlayer:
    """Player that picks uniformly among legal actions."""

    def __init__(self, rng: random.Random, name: str = "Random"):
        self.rng = rng
        self.name = name

    def select_action(self, state: GameState) -> Action:
        return self.rng.choice(state.get_legal_actions())


def create_players(args, seed: Optional[int]) -> List:
    """Create both players for a fresh game."""
    players = []
    kinds = [args.player1, args.player2]
    budgets = [args.playouts1, args.playouts2]
    for player_id in range(2):
        player_seed = None if seed is None else seed * 2 + player_id
        if kinds[player_id] == "mcts":
            config = MCTSConfig(playouts=budgets[player_id], seed=player_seed)
            players.append(MCTSBot(GameState.new(args.rows, args.cols), player_id, config=config,
                                   name=f"MCTS-{budgets[player_id]} (P{player_id})"))
        else:
            rng = random.Random(player_seed) if player_seed is not None else random.Random()
            players.append(RandomPlayer(rng, name=f"Random (P{player_id})"))
    return players


def play_one_game(args, seed: Optional[int]) -> Dict[str, int]:
    """Play a single game and return its scores."""
    players = create_players(args, seed)
    state = GameState.new(args.rows, args.cols)

    while not state.is_finished():
        player = players[state.active_player]
        if isinstance(player, MCTSBot):
            action, (visits, reward) = player.select_action()
            if args.verbose:
                print(f"{player.name}: {action} ({visits} visits, {reward / visits:+.3f} value)")
        else:
            action = player.select_action(state)
            if args.verbose:
                print(f"{player.name}: {action}")

        state = state.clone()
        state.apply_action(action)

        # Every bot hears about every move
        for other in players:
            if isinstance(other, MCTSBot):
                other.update(state)

    if args.verbose:
        print(state)
        print()

    scores = state.get_scores()
    return {"score_0": scores[0], "score_1": scores[1]}


def main():
    """Main function."""
    args = parse_args()
    logging.basicConfig(level=logging.WARNING)

    results = []
    for game_idx in tqdm(range(args.games), desc="Playing"):
        seed = None if args.seed is None else args.seed + game_idx
        results.append(play_one_game(args, seed))

    scores_0 = np.array([r["score_0"] for r in results])
    scores_1 = np.array([r["score_1"] for r in results])
    wins_0 = int(np.sum(scores_0 > scores_1))
    wins_1 = int(np.sum(scores_1 > scores_0))
    draws = len(results) - wins_0 - wins_1

    print("\nResults:")
    print(f"  Player 0 ({args.player1}) wins: {wins_0} ({wins_0 / len(results):.2f})")
    print(f"  Player 1 ({args.player2}) wins: {wins_1} ({wins_1 / len(results):.2f})")
    print(f"  Draws: {draws} ({draws / len(results):.2f})")
    print(f"  Mean score: {np.mean(scores_0):.2f} - {np.mean(scores_1):.2f}")


if __name__ == "__main__":
    main()
