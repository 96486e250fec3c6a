"""CLI entry point for the RPS strategy roster simulator."""

import argparse
import time

from .algorithms import get_strategy_by_name, get_all_strategies, ALL_STRATEGY_CLASSES
from .tournament import DEFAULT_ROUNDS, head_to_head, round_robin, random_pairings
from .stats import (
    compute_standings,
    head_to_head_matrix,
    pair_tallies,
    print_match_summary,
    print_standings,
    print_pair_tallies,
    print_h2h_matrix,
)


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {n}")
    return n


def _descriptions() -> dict[str, str]:
    return {cls.name: cls.description for cls in ALL_STRATEGY_CLASSES}


def _seed_note(args) -> str:
    return f"  |  seed={args.seed}" if args.seed is not None else ""


def list_strategies():
    """Print the roster."""
    print("\nRoster:")
    print("-" * 60)
    for i, cls in enumerate(ALL_STRATEGY_CLASSES, 1):
        print(f"  {i:>2d}. {cls.name:<20s} {cls.description}")
    print()


def cmd_head_to_head(args):
    """Run head-to-head mode."""
    algo_a = get_strategy_by_name(args.algo_a)
    algo_b = get_strategy_by_name(args.algo_b)
    print(f"\n⚔️  Head-to-Head")
    print(f"  {algo_a.name} vs {algo_b.name}  |  {args.rounds} rounds" + _seed_note(args))

    result = head_to_head(algo_a, algo_b, rounds=args.rounds, seed=args.seed)
    print_match_summary(result)


def cmd_tournament(args):
    """Run the full round-robin over the roster."""
    algos = get_all_strategies()
    total_matches = len(algos) * (len(algos) - 1) // 2
    print(f"\n🏆 Round-Robin Tournament")
    print(f"  {len(algos)} strategies  |  {total_matches} matches  |  {args.rounds} rounds each"
          + _seed_note(args))
    print(f"  Running...", end="", flush=True)

    start = time.perf_counter()
    results = round_robin(algos, rounds=args.rounds, seed=args.seed, parallel=args.parallel)
    elapsed = time.perf_counter() - start
    print(f" done! ({len(results)} matches played in {elapsed * 1000:.3f}ms)")

    standings = compute_standings(results)
    print_standings(standings, _descriptions())
    print_pair_tallies(pair_tallies(results))
    print_h2h_matrix(head_to_head_matrix(results), [e.name for e in standings])


def cmd_random(args):
    """Run randomly drawn pairings."""
    print(f"\n🎲 Random Pairings")
    print(f"  {args.matches} matches  |  {args.rounds} rounds each" + _seed_note(args))
    print(f"  Running...", end="", flush=True)

    start = time.perf_counter()
    results = random_pairings(matches=args.matches, rounds=args.rounds, seed=args.seed)
    elapsed = time.perf_counter() - start
    print(f" done! ({len(results)} matches played in {elapsed * 1000:.3f}ms)")

    print_standings(compute_standings(results), _descriptions())
    print_pair_tallies(pair_tallies(results))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rps-roster",
        description="Rock-Paper-Scissors strategy roster simulator",
    )
    parser.add_argument("--list", action="store_true", help="List the roster strategies")
    # Used when no subcommand is given
    parser.set_defaults(rounds=DEFAULT_ROUNDS, seed=None, parallel=False)

    subparsers = parser.add_subparsers(dest="command")

    h2h = subparsers.add_parser("head-to-head", help="One strategy against another")
    h2h.add_argument("--algo-a", required=True, help="Name of strategy A")
    h2h.add_argument("--algo-b", required=True, help="Name of strategy B")
    h2h.add_argument("--rounds", type=_non_negative_int, default=DEFAULT_ROUNDS,
                     help=f"Number of rounds (default: {DEFAULT_ROUNDS})")
    h2h.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")

    trn = subparsers.add_parser("tournament", help="Full round-robin over the roster (default)")
    trn.add_argument("--rounds", type=_non_negative_int, default=DEFAULT_ROUNDS,
                     help=f"Number of rounds per match (default: {DEFAULT_ROUNDS})")
    trn.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    trn.add_argument("--parallel", action="store_true", help="Run matches across CPU cores")

    rnd = subparsers.add_parser("random", help="Matches between randomly drawn pairs")
    rnd.add_argument("--matches", type=_non_negative_int, default=DEFAULT_ROUNDS,
                     help=f"Number of matches (default: {DEFAULT_ROUNDS})")
    rnd.add_argument("--rounds", type=_non_negative_int, default=1,
                     help="Number of rounds per match (default: 1)")
    rnd.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        list_strategies()
        return

    try:
        if args.command == "head-to-head":
            cmd_head_to_head(args)
        elif args.command == "random":
            cmd_random(args)
        else:
            cmd_tournament(args)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
