from __future__ import annotations

import sys
from itertools import permutations
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

from rules import (  # type: ignore[import-not-found]  # noqa: E402
    CANONICAL_RULES,
    InvalidMove,
    Move,
    RuleTable,
    RuleTableInvariantViolation,
)


def test_exactly_one_of_each_distinct_pair_wins() -> None:
    for a, b in permutations(Move, 2):
        assert CANONICAL_RULES.beats(a, b) != CANONICAL_RULES.beats(b, a)


def test_no_move_beats_itself() -> None:
    for move in Move:
        assert not CANONICAL_RULES.beats(move, move)


def test_every_move_beats_two_and_loses_to_two() -> None:
    for move in Move:
        wins = sum(CANONICAL_RULES.beats(move, other) for other in Move)
        losses = sum(CANONICAL_RULES.beats(other, move) for other in Move)
        assert (wins, losses) == (2, 2)


def test_canonical_relation() -> None:
    assert CANONICAL_RULES.defeated_by(Move.ROCK) == {Move.SCISSORS, Move.LIZARD}
    assert CANONICAL_RULES.defeated_by(Move.PAPER) == {Move.ROCK, Move.SPOCK}
    assert CANONICAL_RULES.defeated_by(Move.SCISSORS) == {Move.PAPER, Move.LIZARD}
    assert CANONICAL_RULES.defeated_by(Move.LIZARD) == {Move.SPOCK, Move.PAPER}
    assert CANONICAL_RULES.defeated_by(Move.SPOCK) == {Move.ROCK, Move.SCISSORS}


def test_move_order_and_labels() -> None:
    assert CANONICAL_RULES.moves == (Move.ROCK, Move.PAPER, Move.SCISSORS, Move.LIZARD, Move.SPOCK)
    assert [str(m) for m in CANONICAL_RULES.moves] == ["Rock", "Paper", "Scissors", "Lizard", "Spock"]


def test_move_at_is_one_based() -> None:
    assert CANONICAL_RULES.move_at(1) is Move.ROCK
    assert CANONICAL_RULES.move_at(5) is Move.SPOCK
    with pytest.raises(InvalidMove):
        CANONICAL_RULES.move_at(0)
    with pytest.raises(InvalidMove):
        CANONICAL_RULES.move_at(6)


def test_beats_rejects_values_outside_the_move_set() -> None:
    with pytest.raises(InvalidMove):
        CANONICAL_RULES.beats("rock", Move.PAPER)  # type: ignore[arg-type]
    with pytest.raises(InvalidMove):
        CANONICAL_RULES.beats(Move.ROCK, None)  # type: ignore[arg-type]


def test_beats_rejects_moves_missing_from_a_smaller_table() -> None:
    classic = RuleTable.from_pairs(
        {
            Move.ROCK: (Move.SCISSORS,),
            Move.SCISSORS: (Move.PAPER,),
            Move.PAPER: (Move.ROCK,),
        }
    )
    assert classic.beats(Move.PAPER, Move.ROCK)
    with pytest.raises(InvalidMove):
        classic.beats(Move.SPOCK, Move.ROCK)


def test_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        CANONICAL_RULES.defeats[Move.ROCK] = frozenset()  # type: ignore[index]
    with pytest.raises(AttributeError):
        CANONICAL_RULES.moves = ()  # type: ignore[misc]


def _canonical_pairs() -> dict[Move, tuple[Move, ...]]:
    return {move: tuple(CANONICAL_RULES.defeated_by(move)) for move in CANONICAL_RULES.moves}


def test_rejects_a_move_that_beats_itself() -> None:
    pairs = _canonical_pairs()
    pairs[Move.ROCK] = (Move.ROCK, Move.SCISSORS, Move.LIZARD)
    with pytest.raises(RuleTableInvariantViolation, match="itself"):
        RuleTable.from_pairs(pairs)


def test_rejects_mutual_wins() -> None:
    pairs = _canonical_pairs()
    pairs[Move.SCISSORS] = (Move.PAPER, Move.LIZARD, Move.ROCK)
    with pytest.raises(RuleTableInvariantViolation, match="both beat"):
        RuleTable.from_pairs(pairs)


def test_rejects_a_missing_relation() -> None:
    pairs = _canonical_pairs()
    pairs[Move.ROCK] = (Move.SCISSORS,)
    with pytest.raises(RuleTableInvariantViolation, match="neither"):
        RuleTable.from_pairs(pairs)


def test_rejects_unknown_defeated_move() -> None:
    with pytest.raises(RuleTableInvariantViolation, match="unknown"):
        RuleTable.from_pairs(
            {
                Move.ROCK: (Move.SCISSORS, Move.LIZARD),
                Move.SCISSORS: (Move.PAPER,),
                Move.PAPER: (Move.ROCK,),
            }
        )


def test_rejects_an_unbalanced_tournament() -> None:
    # Transitive order: a tournament, but Rock beats everything.
    with pytest.raises(RuleTableInvariantViolation, match="exactly"):
        RuleTable.from_pairs(
            {
                Move.ROCK: (Move.PAPER, Move.SCISSORS),
                Move.PAPER: (Move.SCISSORS,),
                Move.SCISSORS: (),
            }
        )


def test_rejects_tables_that_are_too_small() -> None:
    with pytest.raises(RuleTableInvariantViolation):
        RuleTable.from_pairs({Move.ROCK: ()})
