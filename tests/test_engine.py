"""Unit tests for rps_roster.engine"""
import random

import pytest

from rps_roster.engine import (
    BEATS,
    BEATEN_BY,
    HISTORY_CAPACITY,
    MOVES,
    History,
    Move,
    Outcome,
    Round,
    Tally,
    determine_winner,
    play_rounds,
    resolve,
    run_match,
)
from rps_roster.algorithms import FixedRotation, ScissorsWeighted, UniformRandom


def test_identical_moves_tie():
    for m in MOVES:
        assert resolve(m, m) is Outcome.TIE
        assert determine_winner(m, m) == 0


def test_beats_relation():
    assert resolve(Move.ROCK, Move.SCISSORS) is Outcome.WIN
    assert resolve(Move.SCISSORS, Move.PAPER) is Outcome.WIN
    assert resolve(Move.PAPER, Move.ROCK) is Outcome.WIN
    wins = {(a, b) for a in MOVES for b in MOVES if resolve(a, b) is Outcome.WIN}
    assert wins == {
        (Move.ROCK, Move.SCISSORS),
        (Move.SCISSORS, Move.PAPER),
        (Move.PAPER, Move.ROCK),
    }


def test_resolve_is_antisymmetric():
    for a in MOVES:
        for b in MOVES:
            assert resolve(b, a) is resolve(a, b).flipped()
            assert determine_winner(a, b) == -determine_winner(b, a)


def test_beaten_by_inverts_beats():
    for m in MOVES:
        assert BEATS[BEATEN_BY[m]] is m
        assert resolve(BEATEN_BY[m], m) is Outcome.WIN


def test_history_record_resolves_outcome():
    h = History()
    entry = h.record(Move.PAPER, Move.ROCK)
    assert entry == Round(Move.PAPER, Move.ROCK, Outcome.WIN)
    assert len(h) == 1
    assert h[-1] is entry


def test_history_keeps_only_most_recent_rounds():
    rng = random.Random(11)
    played = [(rng.choice(MOVES), rng.choice(MOVES)) for _ in range(150)]

    h = History()
    for own, opp in played:
        h.record(own, opp)
        assert len(h) <= HISTORY_CAPACITY

    assert len(h) == 100
    assert [(r.own, r.opponent) for r in h] == played[50:]


def test_history_view_is_read_only_and_live():
    h = History(capacity=3)
    view = h.view()
    assert not view
    h.record(Move.ROCK, Move.ROCK)
    h.record(Move.PAPER, Move.ROCK)
    assert len(view) == 2
    assert [r.own for r in view] == [Move.ROCK, Move.PAPER]
    assert [r.own for r in reversed(view)] == [Move.PAPER, Move.ROCK]
    assert not hasattr(view, "record")


def test_tally_record_flip_and_add():
    t = Tally()
    for outcome in [Outcome.WIN, Outcome.WIN, Outcome.LOSS, Outcome.TIE]:
        t.record(outcome)
    assert t == Tally(wins=2, losses=1, ties=1)
    assert t.rounds == 4
    assert t.flipped() == Tally(wins=1, losses=2, ties=1)
    assert t + Tally(1, 1, 1) == Tally(3, 2, 2)


def test_zero_rounds_gives_zero_tally():
    result = run_match(UniformRandom(), ScissorsWeighted(), rounds=0)
    assert result.tally == Tally(wins=0, losses=0, ties=0)
    assert result.a_moves == [] and result.b_moves == []
    assert result.winner is None


def test_rotation_mirror_match_ties_every_round():
    result = run_match(FixedRotation(), FixedRotation(), rounds=301)
    assert result.tally == Tally(wins=0, losses=0, ties=301)


def test_same_instance_cannot_play_itself():
    algo = FixedRotation()
    with pytest.raises(ValueError):
        run_match(algo, algo, rounds=5)


def test_seeded_match_is_reproducible():
    first = run_match(UniformRandom(), ScissorsWeighted(), rounds=200, seed=7)
    second = run_match(UniformRandom(), ScissorsWeighted(), rounds=200, seed=7)
    assert first.tally == second.tally
    assert first.a_moves == second.a_moves
    assert first.b_moves == second.b_moves
    assert first.tally.rounds == 200


def test_injected_rng_is_kept_without_seed():
    a = UniformRandom(rng=random.Random(5))
    b = FixedRotation()
    result = run_match(a, b, rounds=20)
    expected_rng = random.Random(5)
    assert result.a_moves == [expected_rng.choice(MOVES) for _ in range(20)]


def test_record_moves_off():
    result = run_match(UniformRandom(), FixedRotation(), rounds=50, seed=1, record_moves=False)
    assert result.a_moves == [] and result.b_moves == []
    assert result.tally.rounds == 50


def test_play_rounds_carries_state_across_calls():
    rotation, other = FixedRotation(), FixedRotation()
    a_history, b_history = History(), History()
    first = play_rounds(rotation, other, a_history, b_history, 2)
    second = play_rounds(rotation, other, a_history, b_history, 2)
    assert first.a_moves == [Move.ROCK, Move.PAPER]
    assert second.a_moves == [Move.SCISSORS, Move.ROCK]
    assert len(a_history) == len(b_history) == 4
    assert second.tally == Tally(ties=2)
