"""
Search statistics for a single MCTS node.

Nodes are not linked objects: the search tree is a plain dictionary from
game state to ActionScores, so transpositions share statistics. Each entry
tracks per-action visit counts and summed rewards, plus the list of legal
actions frozen when the state was first reached.
"""
from __future__ import annotations
import math
import random
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from prophecies_ai.core.game import GameState
from prophecies_ai.core.actions import Action, get_legal_actions
from prophecies_ai.mcts.config import MCTSConfig


class ActionScores:
    """
    Per-action statistics for one visited game state.

    Rewards are always stored from the point of view of the player to move
    in that state, so every entry reads as "how good is this action for me".
    """

    def __init__(self, state: GameState):
        """
        Initialize statistics for a newly reached state.

        Args:
            state: The game state this entry describes
        """
        self.visits: Dict[Action, Tuple[int, float]] = {}
        self.available_actions: List[Action] = get_legal_actions(state)

    def mark_visit(self, action: Action, reward: float) -> None:
        """
        Record one more playout through an action.

        Args:
            action: Action taken from this state
            reward: Playout result for the player to move here (+1, 0 or -1)
        """
        visits, rewards = self.visits.get(action, (0, 0.0))
        self.visits[action] = (visits + 1, rewards + reward)

    def get_visit(self, action: Action) -> Tuple[int, float]:
        return self.visits.get(action, (0, 0.0))

    def total_visits(self, actions: Optional[Sequence[Action]] = None) -> int:
        """Sum of visit counts over ``actions`` (all available actions by default)."""
        if actions is None:
            actions = self.available_actions
        return sum(self.get_visit(action)[0] for action in actions)

    def average_reward(self, action: Action) -> float:
        visits, rewards = self.get_visit(action)
        if visits == 0:
            return 0.0
        return rewards / visits

    def ucb_score(self, action: Action, total_visits: int) -> float:
        """
        Calculate the selection score for an action.

        score = sqrt(2 * ln(total_visits) / visits) + (reward + 1) / (visits + 2)

        The exploitation term is the mean reward smoothed towards zero, so a
        single lucky playout does not dominate.

        Args:
            action: Candidate action
            total_visits: Visits summed over all candidate actions

        Returns:
            Selection score (infinite for an untried action)
        """
        visits, rewards = self.get_visit(action)
        if visits == 0:
            return MCTSConfig.INFINITE_VALUE

        exploration = math.sqrt(2.0 * math.log(total_visits) / visits)
        exploitation = (rewards + 1.0) / (visits + 2.0)
        return exploration + exploitation

    def choose_action(self, actions: Sequence[Action], rng: random.Random) -> Action:
        """
        Select the candidate with the highest UCB score.

        Finite ties are broken uniformly at random by reservoir sampling: the
        k-th tied candidate replaces the current choice with probability 1/k.
        Untried actions all score infinity and never compare as tied, so the
        first untried action in order is taken.

        Args:
            actions: Candidate actions (non-empty)
            rng: Random source for tie-breaking

        Returns:
            Selected action
        """
        if not actions:
            raise ValueError("Cannot choose an action from an empty list")

        total_visits = self.total_visits(actions)

        choice = None
        num_optimal = 0
        best_so_far = -math.inf
        for action in actions:
            score = self.ucb_score(action, total_visits)
            if score > best_so_far:
                choice = action
                num_optimal = 1
                best_so_far = score
            elif abs(score - best_so_far) < sys.float_info.epsilon:
                num_optimal += 1
                if rng.random() < 1.0 / num_optimal:
                    choice = action

        return choice

    def __len__(self) -> int:
        return len(self.visits)

    def __str__(self) -> str:
        return (f"ActionScores(visits={self.total_visits()}, "
                f"tracked={len(self.visits)}, "
                f"available={len(self.available_actions)})")
