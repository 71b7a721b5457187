from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from engine import WITHDRAW, HumanChoice
from rules import CANONICAL_RULES, InvalidMove, Move, RuleTable

logger = logging.getLogger("rpsls.players")

QUIT_WORDS = ("q", "quit")
PLAY_AGAIN_PROMPT = "\nPlay Again (y/n)?: "


def move_menu(rules: RuleTable = CANONICAL_RULES) -> str:
    options = " ".join(f"{number}) {move}" for number, move in enumerate(rules.moves, start=1))
    return f"     -> {options}  q) Quit"


def parse_move(raw: str, rules: RuleTable = CANONICAL_RULES) -> HumanChoice:
    """Turn one line of human input into a move or a withdrawal.

    Accepts a menu number or a move name in any case. An empty line counts
    as quitting, like pressing ``q``.
    """
    choice = raw.strip().lower()
    if not choice or choice in QUIT_WORDS:
        return WITHDRAW
    if choice.isdecimal():
        return rules.move_at(int(choice))
    for move in rules.moves:
        if choice == move.value:
            return move
    raise InvalidMove(f"Invalid move {raw.strip()}")


def parse_play_again(raw: str) -> bool:
    # Anything but an explicit "n..." keeps playing, including an empty line.
    return not raw.strip().lower().startswith("n")


@dataclass
class ConsoleHuman:
    rules: RuleTable = CANONICAL_RULES
    input_fn: Callable[[str], str] = input
    output: Callable[[str], None] = print
    prompt: str = field(init=False)

    def __post_init__(self) -> None:
        self.prompt = move_menu(self.rules) + ": "

    def __call__(self) -> HumanChoice:
        while True:
            try:
                raw = self.input_fn(self.prompt)
            except EOFError:
                logger.info("input closed; treating as withdrawal")
                return WITHDRAW
            try:
                return parse_move(raw, self.rules)
            except InvalidMove:
                logger.info("rejected move input %r", raw)
                self.output(f"Invalid move {raw.strip()}")


@dataclass
class ConsolePlayAgain:
    input_fn: Callable[[str], str] = input

    def __call__(self) -> bool:
        try:
            raw = self.input_fn(PLAY_AGAIN_PROMPT)
        except EOFError:
            return False
        return parse_play_again(raw)


@dataclass
class RandomOpponent:
    rules: RuleTable = CANONICAL_RULES
    rng: random.Random = field(default_factory=random.Random)

    def __call__(self) -> Move:
        return self.rng.choice(self.rules.moves)
