"""Unit tests for rps_roster.tournament"""
import pytest

from rps_roster.algorithms import (
    FixedRotation,
    LossExploiter,
    Strategy,
    UniformRandom,
    get_all_strategies,
)
from rps_roster.engine import MOVES, Move, Tally
from rps_roster.tournament import head_to_head, random_pairings, round_robin


def test_round_robin_plays_every_pair_once():
    results = round_robin(rounds=20, seed=1)
    assert len(results) == 10
    pairs = {frozenset((r.algo_a_name, r.algo_b_name)) for r in results}
    assert len(pairs) == 10
    assert all(r.tally.rounds == 20 for r in results)


def test_round_robin_is_reproducible_with_seed():
    first = round_robin(rounds=100, seed=4)
    second = round_robin(rounds=100, seed=4)
    assert [r.tally for r in first] == [r.tally for r in second]


def test_round_robin_parallel_matches_sequential():
    sequential = round_robin(rounds=60, seed=8)
    parallel = round_robin(rounds=60, seed=8, parallel=True)
    assert [(r.algo_a_name, r.algo_b_name, r.tally) for r in parallel] == \
        [(r.algo_a_name, r.algo_b_name, r.tally) for r in sequential]


def test_round_robin_progress_callback():
    calls = []
    round_robin(rounds=5, seed=2, on_match_done=lambda done, total, r: calls.append((done, total)))
    assert calls == [(i, 10) for i in range(1, 11)]


def test_round_robin_zero_rounds():
    results = round_robin(rounds=0)
    assert all(r.tally == Tally() for r in results)


def test_negative_rounds_rejected():
    with pytest.raises(ValueError):
        round_robin(rounds=-1)
    with pytest.raises(ValueError):
        head_to_head(FixedRotation(), LossExploiter(), rounds=-5)
    with pytest.raises(ValueError):
        random_pairings(matches=-1)


def test_head_to_head_rotation_mirror():
    result = head_to_head(FixedRotation(), FixedRotation(), rounds=90)
    assert result.tally == Tally(ties=90)


def test_random_pairings_draw_distinct_strategies():
    results = random_pairings(matches=40, rounds=3, seed=2)
    assert len(results) == 40
    names = {a.name for a in get_all_strategies()}
    for r in results:
        assert r.algo_a_name != r.algo_b_name
        assert {r.algo_a_name, r.algo_b_name} <= names
        assert r.tally.rounds == 3


def test_random_pairings_reproducible_and_empty():
    first = random_pairings(matches=25, seed=6)
    second = random_pairings(matches=25, seed=6)
    assert [(r.algo_a_name, r.algo_b_name, r.tally) for r in first] == \
        [(r.algo_a_name, r.algo_b_name, r.tally) for r in second]
    assert random_pairings(matches=0) == []


def test_random_pairings_need_two_strategies():
    with pytest.raises(ValueError):
        random_pairings([FixedRotation()], matches=1)


class AlwaysPaper(Strategy):
    name = "Always Paper"

    def next_move(self, my_history, opp_history):
        return Move.PAPER


def test_random_pairings_keep_rotation_cycling():
    results = random_pairings(matches=300, seed=1)
    moves = []
    for r in results:
        if r.algo_a_name == FixedRotation.name:
            moves.extend(r.a_moves)
        elif r.algo_b_name == FixedRotation.name:
            moves.extend(r.b_moves)
    assert len(moves) > 3
    assert moves == [MOVES[i % 3] for i in range(len(moves))]


def test_random_pairings_reuse_the_given_instances():
    rotation = FixedRotation()
    results = random_pairings([rotation, UniformRandom()], matches=4, seed=5)
    played = [r.a_moves[0] if r.algo_a_name == rotation.name else r.b_moves[0]
              for r in results]
    assert played == [Move.ROCK, Move.PAPER, Move.SCISSORS, Move.ROCK]
    assert rotation.next_move(None, None) is Move.PAPER


def test_round_robin_parallel_with_unregistered_strategy():
    algos = [AlwaysPaper(), FixedRotation(), LossExploiter()]
    sequential = round_robin(algos, rounds=30, seed=2)
    parallel = round_robin(algos, rounds=30, seed=2, parallel=True)
    assert [(r.algo_a_name, r.algo_b_name, r.tally) for r in parallel] == \
        [(r.algo_a_name, r.algo_b_name, r.tally) for r in sequential]
    assert sequential[0].algo_a_name == "Always Paper"
    assert sequential[0].tally == Tally(wins=10, losses=10, ties=10)
