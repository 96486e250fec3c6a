"""The five roster strategies for Rock-Paper-Scissors matches."""

from abc import ABC, abstractmethod
from collections import Counter
import random
from typing import Optional
from .engine import Move, MOVES, BEATEN_BY, Outcome


class Strategy(ABC):
    """Base class for roster strategies.

    ``rng`` is the only source of randomness a strategy may use. Pass a
    seeded ``random.Random`` to make a strategy reproducible; the engine
    also replaces it when a match is run with a seed.
    """

    description = ""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.reset()

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def next_move(self, my_history, opp_history) -> Move:
        """Pick the next move given both players' (read-only) histories."""
        ...

    def reset(self):
        """Reset any internal state between matches."""
        pass

    def __repr__(self):
        return f"<{self.name}>"


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _counter_move(move: Move) -> Move:
    """Return the move that beats `move`."""
    return BEATEN_BY[move]


# ---------------------------------------------------------------------------
# 1: Uniform Random
# ---------------------------------------------------------------------------

class UniformRandom(Strategy):
    """Chooses a move completely at random.

    Each move has an equal probability (33.3%). Unexploitable in the long
    run, but it cannot exploit anyone either.
    """
    name = "Uniform Random"
    description = "picks rock, paper or scissors uniformly at random"

    def next_move(self, my_history, opp_history):
        return self.rng.choice(MOVES)


# ---------------------------------------------------------------------------
# 2: Scissors-Weighted Random
# ---------------------------------------------------------------------------

# Rock, Paper, Scissors
SCISSORS_WEIGHTS = (0.2, 0.2, 0.6)


class ScissorsWeighted(Strategy):
    """Random, but heavily weighted towards Scissors (60/20/20)."""
    name = "Scissors Weighted"
    description = "is heavily weighted to scissors and otherwise random"

    def next_move(self, my_history, opp_history):
        return self.rng.choices(MOVES, weights=SCISSORS_WEIGHTS)[0]


# ---------------------------------------------------------------------------
# 3: Opponent-Loss-Pattern Exploiter
# ---------------------------------------------------------------------------

class LossExploiter(Strategy):
    """Counters the move the opponent loses with most often.

    Looks only at the rounds the opponent lost, finds the move it played
    most in them, and plays what beats it. Equal counts go to the lowest
    ordinal (Rock, then Paper, then Scissors). Until the opponent has lost
    a round, plays at random.

    **Window**: the opponent's last 100 rounds (history capacity)
    """
    name = "Loss Exploiter"
    description = "counters the move its opponent most often loses with"

    def next_move(self, my_history, opp_history):
        counts = Counter(r.own for r in opp_history if r.outcome is Outcome.LOSS)
        if not counts:
            return self.rng.choice(MOVES)
        # max() keeps the first of equal counts, so MOVES order breaks ties
        most_common = max(MOVES, key=lambda m: counts[m])
        return _counter_move(most_common)


# ---------------------------------------------------------------------------
# 4: Fixed Rotation R → P → S
# ---------------------------------------------------------------------------

class FixedRotation(Strategy):
    """Cycles through Rock -> Paper -> Scissors repeatedly.

    The cursor advances once per call whatever the outcome and starts at
    Rock every match.

    **Sequence**: R, P, S, R, P, S...
    """
    name = "Fixed Rotation"
    description = "cycles rock, paper, scissors ad nauseam"

    def reset(self):
        self._cursor = 0

    def next_move(self, my_history, opp_history):
        move = MOVES[self._cursor]
        self._cursor = (self._cursor + 1) % len(MOVES)
        return move


# ---------------------------------------------------------------------------
# 5: Mirror Last Success
# ---------------------------------------------------------------------------

class MirrorLastWin(Strategy):
    """Replays the move of its own most recent winning round.

    Random until it has won at least once.
    """
    name = "Mirror Last Win"
    description = "replays the move of its most recent win"

    def next_move(self, my_history, opp_history):
        for r in reversed(my_history):
            if r.outcome is Outcome.WIN:
                return r.own
        return self.rng.choice(MOVES)


# Fixed roster, in play order
ALL_STRATEGY_CLASSES = [
    UniformRandom,
    ScissorsWeighted,
    LossExploiter,
    FixedRotation,
    MirrorLastWin,
]


def get_all_strategies() -> list[Strategy]:
    """Return fresh instances of the whole roster."""
    return [cls() for cls in ALL_STRATEGY_CLASSES]


def get_strategy_by_name(name: str) -> Strategy:
    """Get a single strategy instance by name (case-insensitive)."""
    name_lower = name.lower()
    for cls in ALL_STRATEGY_CLASSES:
        if cls.name.lower() == name_lower:
            return cls()
    available = ", ".join(cls.name for cls in ALL_STRATEGY_CLASSES)
    raise ValueError(f"Unknown strategy: '{name}'. Available: {available}")
