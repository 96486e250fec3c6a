"""Match schedules: head-to-head, full round-robin, random pairings.

Round-robin can optionally run matches in parallel via ProcessPoolExecutor;
its matches share no state, so this only changes wall-clock time.
All schedules accept an on_match_done callback for progress tracking.
"""

import os
import random
from typing import Optional, Callable
from concurrent.futures import ProcessPoolExecutor, as_completed

from .engine import History, run_match, play_rounds, MatchResult
from .algorithms import Strategy, get_all_strategies

DEFAULT_ROUNDS = 1000


def _check_count(label: str, value: int):
    if value < 0:
        raise ValueError(f"{label} must be non-negative, got {value}")


# ---------------------------------------------------------------------------
# Worker function for parallel execution (must be top-level for pickling)
# ---------------------------------------------------------------------------

def _run_match_worker(
    algo_a_cls: type,
    algo_b_cls: type,
    rounds: int,
    seed: Optional[int],
    record_moves: bool = True,
) -> MatchResult:
    """Run a single match with fresh strategy instances.

    Only the classes cross a process boundary, never stateful instances.
    """
    return run_match(algo_a_cls(), algo_b_cls(), rounds=rounds, seed=seed,
                     record_moves=record_moves)


# ---------------------------------------------------------------------------
# Schedules
# ---------------------------------------------------------------------------

def head_to_head(
    algo_a: Strategy,
    algo_b: Strategy,
    rounds: int = DEFAULT_ROUNDS,
    seed: Optional[int] = None,
) -> MatchResult:
    """Run a single match between two strategies."""
    _check_count("rounds", rounds)
    return run_match(algo_a, algo_b, rounds=rounds, seed=seed)


def round_robin(
    algos: Optional[list[Strategy]] = None,
    rounds: int = DEFAULT_ROUNDS,
    seed: Optional[int] = None,
    parallel: bool = False,
    on_match_done: Optional[Callable[[int, int, MatchResult], None]] = None,
) -> list[MatchResult]:
    """Every strategy plays every other strategy once.

    Each match starts from fresh instances and empty histories.

    Args:
        parallel: If True, run matches across multiple CPU cores.
        on_match_done: Optional callback(completed, total, result) called
                       after each match finishes.
    """
    _check_count("rounds", rounds)
    if algos is None:
        algos = get_all_strategies()

    # (algo_a_cls, algo_b_cls, rounds, match_seed)
    jobs = []
    match_idx = 0
    for i in range(len(algos)):
        for j in range(i + 1, len(algos)):
            match_seed = (seed * 10000 + match_idx) if seed is not None else None
            jobs.append((algos[i].__class__, algos[j].__class__, rounds, match_seed))
            match_idx += 1

    if parallel and len(jobs) > 1:
        return _run_parallel(jobs, on_match_done=on_match_done)

    results = []
    for i, (algo_a_cls, algo_b_cls, rds, ms) in enumerate(jobs):
        result = _run_match_worker(algo_a_cls, algo_b_cls, rds, ms)
        results.append(result)
        if on_match_done:
            on_match_done(i + 1, len(jobs), result)
    return results


def random_pairings(
    algos: Optional[list[Strategy]] = None,
    matches: int = DEFAULT_ROUNDS,
    rounds: int = 1,
    seed: Optional[int] = None,
    on_match_done: Optional[Callable[[int, int, MatchResult], None]] = None,
) -> list[MatchResult]:
    """Play ``matches`` matches, each between two distinct strategies
    drawn at random from the roster.

    Unlike round-robin, the roster plays as one persistent population:
    each strategy instance and its history carry over from one pairing
    to the next, so learning and rotation continue across the schedule.
    """
    _check_count("matches", matches)
    _check_count("rounds", rounds)
    if algos is None:
        algos = get_all_strategies()
    if len(algos) < 2:
        raise ValueError("random pairings need at least two strategies")

    rng = random.Random(seed)
    for algo in algos:
        if seed is not None:
            algo.rng = random.Random(rng.randint(0, 2**31))
        algo.reset()
    histories = [History() for _ in algos]

    results = []
    for match_idx in range(matches):
        pool = list(range(len(algos)))
        a = pool.pop(rng.randrange(len(pool)))
        b = pool.pop(rng.randrange(len(pool)))

        result = play_rounds(algos[a], algos[b], histories[a], histories[b], rounds)
        results.append(result)
        if on_match_done:
            on_match_done(match_idx + 1, matches, result)
    return results


# ---------------------------------------------------------------------------
# Parallel execution helper
# ---------------------------------------------------------------------------

def _run_parallel(
    jobs: list[tuple[type, type, int, Optional[int]]],
    on_match_done: Optional[Callable[[int, int, MatchResult], None]] = None,
) -> list[MatchResult]:
    """Run a batch of matches in parallel using ProcessPoolExecutor.

    Results come back in job order regardless of completion order.
    """
    max_workers = min(os.cpu_count() or 4, len(jobs))
    total = len(jobs)

    results: list[Optional[MatchResult]] = [None] * total
    completed = 0

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        future_to_idx = {}
        for idx, (a_cls, b_cls, rounds, mseed) in enumerate(jobs):
            future = executor.submit(_run_match_worker, a_cls, b_cls, rounds, mseed)
            future_to_idx[future] = idx

        for future in as_completed(future_to_idx):
            idx = future_to_idx[future]
            result = future.result()
            results[idx] = result
            completed += 1

            if on_match_done:
                on_match_done(completed, total, result)

    return results  # type: ignore[return-value]
