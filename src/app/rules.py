from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from types import MappingProxyType


class Move(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"
    LIZARD = "lizard"
    SPOCK = "spock"

    @property
    def label(self) -> str:
        return self.name.title()

    def __str__(self) -> str:
        return self.label


class InvalidMove(ValueError):
    """A selection that is not one of the table's moves."""


class RuleTableInvariantViolation(ValueError):
    """The dominance relation is not a balanced tournament."""


@dataclass(frozen=True, eq=False)
class RuleTable:
    """Which move beats which.

    For any two distinct moves exactly one beats the other, no move beats
    itself, and every move beats the same number of others. The table is
    checked once when it is built and never changes afterwards.
    """

    moves: tuple[Move, ...]
    defeats: Mapping[Move, frozenset[Move]]

    def __post_init__(self) -> None:
        moves = tuple(self.moves)
        defeats = {move: frozenset(beaten) for move, beaten in self.defeats.items()}
        _check_tournament(moves, defeats)
        object.__setattr__(self, "moves", moves)
        object.__setattr__(self, "defeats", MappingProxyType(defeats))

    @classmethod
    def from_pairs(cls, pairs: Mapping[Move, Iterable[Move]]) -> "RuleTable":
        return cls(moves=tuple(pairs), defeats={move: frozenset(beaten) for move, beaten in pairs.items()})

    def beats(self, x: Move, y: Move) -> bool:
        self._require(x)
        self._require(y)
        return y in self.defeats[x]

    def defeated_by(self, move: Move) -> frozenset[Move]:
        self._require(move)
        return self.defeats[move]

    def move_at(self, number: int) -> Move:
        # Menu numbers are 1-based.
        if not 1 <= number <= len(self.moves):
            raise InvalidMove(f"no move numbered {number}")
        return self.moves[number - 1]

    def _require(self, move: Move) -> None:
        if not isinstance(move, Move) or move not in self.defeats:
            raise InvalidMove(f"{move!r} is not a move in this rule table")


def _check_tournament(moves: tuple[Move, ...], defeats: dict[Move, frozenset[Move]]) -> None:
    if len(moves) < 3:
        raise RuleTableInvariantViolation("a rule table needs at least three moves")
    if len(set(moves)) != len(moves):
        raise RuleTableInvariantViolation("duplicate moves in rule table")
    if set(defeats) != set(moves):
        raise RuleTableInvariantViolation("every move needs exactly one defeats-set")

    known = frozenset(moves)
    for move, beaten in defeats.items():
        if move in beaten:
            raise RuleTableInvariantViolation(f"{move} cannot beat itself")
        unknown = beaten - known
        if unknown:
            names = ", ".join(sorted(str(m) for m in unknown))
            raise RuleTableInvariantViolation(f"{move} beats unknown move(s): {names}")

    for a, b in combinations(moves, 2):
        a_wins = b in defeats[a]
        b_wins = a in defeats[b]
        if a_wins and b_wins:
            raise RuleTableInvariantViolation(f"{a} and {b} both beat each other")
        if not a_wins and not b_wins:
            raise RuleTableInvariantViolation(f"neither {a} nor {b} beats the other")

    pairs = len(moves) * (len(moves) - 1) // 2
    total = sum(len(beaten) for beaten in defeats.values())
    if total != pairs:
        raise RuleTableInvariantViolation(f"expected {pairs} wins in total, found {total}")

    per_move = (len(moves) - 1) // 2
    lopsided = [m for m in moves if len(defeats[m]) != per_move or len(moves) % 2 == 0]
    if lopsided:
        names = ", ".join(str(m) for m in lopsided)
        raise RuleTableInvariantViolation(f"every move must beat exactly {per_move} others ({names} do not)")


# http://en.wikipedia.org/wiki/Rock-paper-scissors-lizard-Spock
CANONICAL_RULES = RuleTable.from_pairs(
    {
        Move.ROCK: (Move.SCISSORS, Move.LIZARD),
        Move.PAPER: (Move.ROCK, Move.SPOCK),
        Move.SCISSORS: (Move.PAPER, Move.LIZARD),
        Move.LIZARD: (Move.SPOCK, Move.PAPER),
        Move.SPOCK: (Move.ROCK, Move.SCISSORS),
    }
)
