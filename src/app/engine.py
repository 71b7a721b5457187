from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Final, Literal, Union

from rules import CANONICAL_RULES, Move, RuleTable
from scoreboard import MatchSummary, MatchTally, Side

logger = logging.getLogger("rpsls.engine")

Outcome = Literal["human_win", "computer_win", "draw"]
GameStatus = Literal["in_progress", "human_won", "computer_won", "abandoned"]

WITHDRAW: Final = "withdraw"
ROUNDS_TO_WIN: Final[int] = 2

HumanChoice = Union[Move, Literal["withdraw"]]
HumanMoveSource = Callable[[], HumanChoice]
ComputerMoveSource = Callable[[], Move]
PlayAgainSource = Callable[[], bool]


def resolve_round(human: Move, computer: Move, rules: RuleTable = CANONICAL_RULES) -> Outcome:
    if human is computer:
        return "draw"
    # The table is a tournament, so a distinct move that doesn't lose must win.
    return "human_win" if rules.beats(human, computer) else "computer_win"


@dataclass(frozen=True)
class RoundResult:
    number: int
    human: Move
    computer: Move
    outcome: Outcome

    @property
    def winning_move(self) -> Move | None:
        if self.outcome == "human_win":
            return self.human
        if self.outcome == "computer_win":
            return self.computer
        return None

    @property
    def losing_move(self) -> Move | None:
        if self.outcome == "human_win":
            return self.computer
        if self.outcome == "computer_win":
            return self.human
        return None


@dataclass
class GameState:
    """Score of one best-of-three game.

    ``in_progress`` is the only state that accepts rounds or a withdrawal.
    The first side to reach ``ROUNDS_TO_WIN`` round wins takes the game; a
    withdrawal concedes the game to the computer whatever the score.
    """

    human_round_wins: int = 0
    computer_round_wins: int = 0
    status: GameStatus = "in_progress"
    rounds: list[RoundResult] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.status != "in_progress"

    @property
    def winner(self) -> Side | None:
        if self.status == "human_won":
            return "human"
        if self.status in ("computer_won", "abandoned"):
            return "computer"
        return None

    def apply(self, result: RoundResult) -> None:
        self._require_in_progress()
        self.rounds.append(result)
        if result.outcome == "human_win":
            self.human_round_wins += 1
        elif result.outcome == "computer_win":
            self.computer_round_wins += 1

        if self.human_round_wins == ROUNDS_TO_WIN:
            self.status = "human_won"
        elif self.computer_round_wins == ROUNDS_TO_WIN:
            self.status = "computer_won"

    def withdraw(self) -> None:
        self._require_in_progress()
        self.status = "abandoned"

    def _require_in_progress(self) -> None:
        if self.finished:
            raise RuntimeError(f"game already finished ({self.status})")


@dataclass(frozen=True)
class GameResult:
    human_rounds: int
    computer_rounds: int
    status: GameStatus
    winner: Side
    rounds: tuple[RoundResult, ...] = ()

    @property
    def abandoned(self) -> bool:
        return self.status == "abandoned"


RoundCallback = Callable[[RoundResult], None]
GameCallback = Callable[[GameResult, MatchTally], None]


def play_game(
    human_source: HumanMoveSource,
    computer_source: ComputerMoveSource,
    rules: RuleTable = CANONICAL_RULES,
    on_round: RoundCallback | None = None,
) -> GameResult:
    state = GameState()
    while not state.finished:
        computer = computer_source()
        choice = human_source()
        if choice == WITHDRAW:
            logger.info(
                "human withdrew at %d-%d; game goes to the computer",
                state.human_round_wins,
                state.computer_round_wins,
            )
            state.withdraw()
            break

        outcome = resolve_round(choice, computer, rules)  # type: ignore[arg-type]
        result = RoundResult(number=len(state.rounds) + 1, human=choice, computer=computer, outcome=outcome)  # type: ignore[arg-type]
        state.apply(result)
        logger.debug(
            "round %d: %s vs %s -> %s (%d-%d)",
            result.number,
            result.human,
            result.computer,
            outcome,
            state.human_round_wins,
            state.computer_round_wins,
        )
        if on_round is not None:
            on_round(result)

    winner = state.winner
    if winner is None:
        raise RuntimeError(f"game loop exited while {state.status}")
    logger.debug("game over: %s, winner %s", state.status, winner)
    return GameResult(
        human_rounds=state.human_round_wins,
        computer_rounds=state.computer_round_wins,
        status=state.status,
        winner=winner,
        rounds=tuple(state.rounds),
    )


@dataclass
class Match:
    """A run of best-of-three games sharing one tally.

    ``games()`` plays until the play-again source declines or the caller
    stops iterating; ``summary()`` can be read at any point.
    """

    human_source: HumanMoveSource
    computer_source: ComputerMoveSource
    play_again_source: PlayAgainSource
    rules: RuleTable = CANONICAL_RULES
    tally: MatchTally = field(default_factory=MatchTally)
    on_game_start: Callable[[int], None] | None = None
    on_round: RoundCallback | None = None

    def games(self) -> Iterator[GameResult]:
        game_no = 1
        while True:
            if self.on_game_start is not None:
                self.on_game_start(game_no)
            result = play_game(self.human_source, self.computer_source, self.rules, on_round=self.on_round)
            self.tally.record_win(result.winner)
            yield result
            if not self.play_again_source():
                return
            game_no += 1

    def summary(self) -> MatchSummary:
        return self.tally.summary()


def run_match(
    play_again_source: PlayAgainSource,
    human_source: HumanMoveSource,
    computer_source: ComputerMoveSource,
    rules: RuleTable = CANONICAL_RULES,
    *,
    on_game_start: Callable[[int], None] | None = None,
    on_round: RoundCallback | None = None,
    on_game: GameCallback | None = None,
) -> MatchSummary:
    match = Match(
        human_source=human_source,
        computer_source=computer_source,
        play_again_source=play_again_source,
        rules=rules,
        on_game_start=on_game_start,
        on_round=on_round,
    )
    for result in match.games():
        if on_game is not None:
            on_game(result, match.tally)
    summary = match.summary()
    logger.debug("match over after %d game(s)", summary.games_played)
    return summary
