"""Standings, tallies and pretty-printing for RPS matches."""

from dataclasses import dataclass, field
from collections import Counter, defaultdict
from .engine import MOVES, MatchResult, Outcome, Tally, resolve


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

@dataclass
class Standing:
    """Aggregated record for one strategy across multiple matches."""
    name: str
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    matches_played: int = 0
    moves: Counter = field(default_factory=Counter)
    winning_moves: Counter = field(default_factory=Counter)
    losing_moves: Counter = field(default_factory=Counter)

    @property
    def total_rounds(self) -> int:
        return self.total_wins + self.total_losses + self.total_ties

    @property
    def win_pct(self) -> float:
        total = self.total_rounds
        return (self.total_wins / total * 100) if total else 0.0

    @property
    def ratio(self) -> float:
        """Round wins per round loss."""
        if self.total_losses:
            return self.total_wins / self.total_losses
        return float("inf") if self.total_wins else 0.0

    def _add(self, tally: Tally, own_moves: list, opp_moves: list):
        self.total_wins += tally.wins
        self.total_losses += tally.losses
        self.total_ties += tally.ties
        self.matches_played += 1
        for mine, theirs in zip(own_moves, opp_moves):
            self.moves[mine] += 1
            outcome = resolve(mine, theirs)
            if outcome is Outcome.WIN:
                self.winning_moves[mine] += 1
            elif outcome is Outcome.LOSS:
                self.losing_moves[mine] += 1


def compute_standings(results: list[MatchResult]) -> list[Standing]:
    """Build standings sorted by round win %, then W/L ratio, then name.

    Move counts are only filled in for matches run with ``record_moves``.
    """
    entries: dict[str, Standing] = {}

    for r in results:
        for name in [r.algo_a_name, r.algo_b_name]:
            if name not in entries:
                entries[name] = Standing(name=name)

        entries[r.algo_a_name]._add(r.tally, r.a_moves, r.b_moves)
        entries[r.algo_b_name]._add(r.tally.flipped(), r.b_moves, r.a_moves)

    return sorted(entries.values(), key=lambda e: (-e.win_pct, -e.ratio, e.name))


def pair_tallies(results: list[MatchResult]) -> dict[tuple[str, str], Tally]:
    """Sum tallies per strategy pairing.

    A pairing is keyed by the order it was first seen in; later matches
    with the sides swapped are added with the perspective flipped.
    """
    tallies: dict[tuple[str, str], Tally] = {}
    for r in results:
        key = (r.algo_a_name, r.algo_b_name)
        swapped = (r.algo_b_name, r.algo_a_name)
        if key not in tallies and swapped in tallies:
            tallies[swapped] = tallies[swapped] + r.tally.flipped()
        else:
            tallies[key] = tallies.get(key, Tally()) + r.tally
    return tallies


def head_to_head_matrix(results: list[MatchResult]) -> dict[str, dict[str, str]]:
    """Build an NxN head-to-head result matrix.

    Returns: {algo_a: {algo_b: "W" | "L" | "D"}}
    """
    matrix: dict[str, dict[str, str]] = defaultdict(dict)
    for r in results:
        if r.a_wins > r.b_wins:
            matrix[r.algo_a_name][r.algo_b_name] = "W"
            matrix[r.algo_b_name][r.algo_a_name] = "L"
        elif r.b_wins > r.a_wins:
            matrix[r.algo_a_name][r.algo_b_name] = "L"
            matrix[r.algo_b_name][r.algo_a_name] = "W"
        else:
            matrix[r.algo_a_name][r.algo_b_name] = "D"
            matrix[r.algo_b_name][r.algo_a_name] = "D"
    return dict(matrix)


# ---------------------------------------------------------------------------
# Pretty-printing
# ---------------------------------------------------------------------------

def _format_counts(counts: Counter) -> str:
    return ", ".join(f"{m.value.capitalize()} {counts[m]}x" for m in MOVES)


def _format_ratio(ratio: float) -> str:
    return "inf" if ratio == float("inf") else f"{ratio:.2f}"


def print_match_summary(result: MatchResult):
    """Print a detailed summary of a single match."""
    print("=" * 60)
    print(f"  {result.algo_a_name}  vs  {result.algo_b_name}")
    print(f"  Rounds: {result.rounds}")
    print("=" * 60)
    print(f"  {'':20s} {'A':>10s} {'B':>10s}")
    print(f"  {'Wins':20s} {result.a_wins:>10d} {result.b_wins:>10d}")
    print(f"  {'Losses':20s} {result.b_wins:>10d} {result.a_wins:>10d}")
    print(f"  {'Ties':20s} {result.ties:>10d} {result.ties:>10d}")
    print(f"  {'Win %':20s} {result.a_win_pct:>9.1f}% {result.b_win_pct:>9.1f}%")
    print()
    print(f"  A move distribution: {result.a_move_distribution}")
    print(f"  B move distribution: {result.b_move_distribution}")
    print(f"\n  ★ Winner: {result.winner or 'DRAW'}")
    print("=" * 60)


def print_standings(standings: list[Standing], descriptions: dict[str, str] = None):
    """Print a standings table followed by each strategy's move breakdown."""
    descriptions = descriptions or {}
    print()
    print("=" * 78)
    print(f"  {'#':>3s}  {'Strategy':<20s} {'MP':>4s} {'Wins':>7s} {'Losses':>7s} "
          f"{'Ties':>7s} {'Win%':>7s} {'W/L':>6s}")
    print("-" * 78)
    for i, e in enumerate(standings, 1):
        print(f"  {i:>3d}  {e.name:<20s} {e.matches_played:>4d} {e.total_wins:>7d} "
              f"{e.total_losses:>7d} {e.total_ties:>7d} {e.win_pct:>6.1f}% "
              f"{_format_ratio(e.ratio):>6s}")
    print("=" * 78)
    print("  MP = Matches Played  |  Wins/Losses/Ties counted per round")
    print()

    for e in standings:
        if not e.moves:
            continue
        desc = descriptions.get(e.name)
        print(f"  ▸ {e.name}" + (f" {desc}" if desc else ""))
        print(f"    Wins        [{_format_counts(e.winning_moves)}]")
        print(f"    Losses      [{_format_counts(e.losing_moves)}]")
        print(f"    Total Plays [{_format_counts(e.moves)}]")
    print()


def print_pair_tallies(tallies: dict[tuple[str, str], Tally]):
    """Print one line per strategy pairing."""
    print("Pairings (wins / losses / ties for the left-hand strategy):")
    print()
    for (a, b), t in tallies.items():
        print(f"  {a:>20s} vs {b:<20s}  →  W:{t.wins:>5d}  L:{t.losses:>5d}  T:{t.ties:>5d}")
    print()


def print_h2h_matrix(matrix: dict[str, dict[str, str]], names: list[str]):
    """Print the head-to-head matrix."""
    abbrs = [f"{i+1:>2d}" for i in range(len(names))]

    print()
    print("Head-to-Head Matrix (W=Win, L=Loss, D=Draw):")
    print()

    for i, n in enumerate(names):
        print(f"  {i+1:>2d} = {n}")
    print()

    header = f"  {'':>20s} " + " ".join(f"{a:>3s}" for a in abbrs)
    print(header)
    print("  " + "-" * (20 + 1 + 4 * len(names)))

    for name in names:
        row = f"  {name:>20s} "
        for opp in names:
            if name == opp:
                row += "  - "
            else:
                result = matrix.get(name, {}).get(opp, "?")
                row += f"  {result} "
        print(row)
    print()
