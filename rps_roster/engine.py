"""Core game engine for Rock-Paper-Scissors matches."""

from enum import Enum
from dataclasses import dataclass, field
from collections import Counter, deque
import random
from typing import NamedTuple, Optional


class Move(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


# Ordinal order, also used for tie-breaks
MOVES = [Move.ROCK, Move.PAPER, Move.SCISSORS]

# What each move beats
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}

# What beats each move
BEATEN_BY = {v: k for k, v in BEATS.items()}


class Outcome(Enum):
    """Result of a round from one player's point of view."""
    WIN = "win"
    LOSS = "loss"
    TIE = "tie"

    def flipped(self) -> "Outcome":
        if self is Outcome.WIN:
            return Outcome.LOSS
        if self is Outcome.LOSS:
            return Outcome.WIN
        return Outcome.TIE


# Pre-computed outcome table: (mine, theirs) → outcome for "mine"
_OUTCOME_TABLE = {
    (mine, theirs): (
        Outcome.TIE if mine is theirs
        else Outcome.WIN if BEATS[mine] is theirs
        else Outcome.LOSS
    )
    for mine in MOVES
    for theirs in MOVES
}

_WINNER_CODES = {Outcome.WIN: 1, Outcome.LOSS: -1, Outcome.TIE: 0}


def resolve(mine: Move, theirs: Move) -> Outcome:
    """Outcome of a round for the player who played ``mine``."""
    return _OUTCOME_TABLE[mine, theirs]


def determine_winner(move_a: Move, move_b: Move) -> int:
    """Return 1 if A wins, -1 if B wins, 0 for draw."""
    return _WINNER_CODES[_OUTCOME_TABLE[move_a, move_b]]


class Round(NamedTuple):
    """One round as seen by one player."""
    own: Move
    opponent: Move
    outcome: Outcome


HISTORY_CAPACITY = 100


class History:
    """Fixed-capacity record of one player's rounds in a match.

    Backed by a ring buffer: once ``capacity`` rounds are stored, each
    append evicts the oldest round. Iteration runs oldest → newest.
    """
    __slots__ = ('_rounds', '_view')

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self._rounds: deque[Round] = deque(maxlen=capacity)
        self._view = _FrozenHistory(self._rounds)

    @property
    def capacity(self) -> int:
        return self._rounds.maxlen

    def record(self, own: Move, opponent: Move) -> Round:
        """Resolve and append a round, returning the stored entry."""
        entry = Round(own, opponent, resolve(own, opponent))
        self._rounds.append(entry)
        return entry

    def view(self) -> "_FrozenHistory":
        """Read-only view that tracks this history as it grows."""
        return self._view

    def __len__(self):
        return len(self._rounds)

    def __iter__(self):
        return iter(self._rounds)

    def __getitem__(self, index: int) -> Round:
        return self._rounds[index]

    def __repr__(self):
        return f"History({len(self._rounds)}/{self.capacity})"


class _FrozenHistory:
    """O(1) immutable view of a History.

    Wraps a reference to the history's ring buffer without copying.
    Supports the read operations strategies use (indexing, iteration,
    reversed, len, bool) but has no way to append.
    """
    __slots__ = ('_data',)

    def __init__(self, data: deque):
        self._data = data

    def __getitem__(self, index: int) -> Round:
        return self._data[index]

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __reversed__(self):
        return reversed(self._data)

    def __bool__(self):
        return bool(self._data)

    def __repr__(self):
        return f"FrozenHistory({list(self._data)!r})"


@dataclass
class Tally:
    """Win/loss/tie counters from the first-named player's perspective."""
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def rounds(self) -> int:
        return self.wins + self.losses + self.ties

    def record(self, outcome: Outcome):
        if outcome is Outcome.WIN:
            self.wins += 1
        elif outcome is Outcome.LOSS:
            self.losses += 1
        else:
            self.ties += 1

    def flipped(self) -> "Tally":
        """The same counts seen from the other side."""
        return Tally(wins=self.losses, losses=self.wins, ties=self.ties)

    def __add__(self, other: "Tally") -> "Tally":
        if not isinstance(other, Tally):
            return NotImplemented
        return Tally(
            wins=self.wins + other.wins,
            losses=self.losses + other.losses,
            ties=self.ties + other.ties,
        )


@dataclass
class MatchResult:
    """Result of a match between two strategies."""
    algo_a_name: str
    algo_b_name: str
    rounds: int
    tally: Tally = field(default_factory=Tally)
    a_moves: list = field(default_factory=list)
    b_moves: list = field(default_factory=list)

    @property
    def a_wins(self) -> int:
        return self.tally.wins

    @property
    def b_wins(self) -> int:
        return self.tally.losses

    @property
    def ties(self) -> int:
        return self.tally.ties

    @property
    def a_win_pct(self) -> float:
        return (self.a_wins / self.rounds * 100) if self.rounds else 0.0

    @property
    def b_win_pct(self) -> float:
        return (self.b_wins / self.rounds * 100) if self.rounds else 0.0

    @property
    def winner(self) -> Optional[str]:
        """Name of the strategy with more round wins, None on a draw."""
        if self.a_wins > self.b_wins:
            return self.algo_a_name
        if self.b_wins > self.a_wins:
            return self.algo_b_name
        return None

    @property
    def a_move_distribution(self) -> dict[str, int]:
        return dict(Counter(m.value for m in self.a_moves))

    @property
    def b_move_distribution(self) -> dict[str, int]:
        return dict(Counter(m.value for m in self.b_moves))


def run_match(
    algo_a,
    algo_b,
    rounds: int = 1000,
    seed: Optional[int] = None,
    record_moves: bool = True,
) -> MatchResult:
    """Run a match of N rounds between two strategy instances.

    With a seed, each strategy gets its own RNG derived from the master
    seed. Without one, the strategies keep whatever random source they
    already hold.

    Args:
        record_moves: If False, skip storing per-round moves in the result.
    """
    if algo_a is algo_b:
        raise ValueError(
            f"'{algo_a.name}' cannot play against its own instance; "
            "pass two separate instances"
        )

    if seed is not None:
        master_rng = random.Random(seed)
        algo_a.rng = random.Random(master_rng.randint(0, 2**31))
        algo_b.rng = random.Random(master_rng.randint(0, 2**31))
    algo_a.reset()
    algo_b.reset()

    # Owned by the engine for this match only
    return play_rounds(algo_a, algo_b, History(), History(), rounds, record_moves)


def play_rounds(
    algo_a,
    algo_b,
    a_history: History,
    b_history: History,
    rounds: int,
    record_moves: bool = True,
) -> MatchResult:
    """Play rounds on top of the given histories without resetting anything.

    Both histories are updated in place, so a caller can carry them (and
    the strategies) across several pairings.
    """
    result = MatchResult(
        algo_a_name=algo_a.name,
        algo_b_name=algo_b.name,
        rounds=rounds,
    )

    a_view = a_history.view()
    b_view = b_history.view()

    a_next = algo_a.next_move
    b_next = algo_b.next_move
    tally = result.tally

    for _ in range(rounds):
        move_a = a_next(a_view, b_view)
        move_b = b_next(b_view, a_view)

        entry = a_history.record(move_a, move_b)
        b_history.record(move_b, move_a)
        tally.record(entry.outcome)

        if record_moves:
            result.a_moves.append(move_a)
            result.b_moves.append(move_b)

    return result
