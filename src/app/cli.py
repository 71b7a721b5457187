from __future__ import annotations

import argparse
import logging
import os
import random

from engine import GameResult, Match, RoundResult
from players import ConsoleHuman, ConsolePlayAgain, RandomOpponent
from rules import CANONICAL_RULES, RuleTable
from scoreboard import MatchSummary, MatchTally


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main(argv: list[str] | None = None) -> int:
    # Shared so --log-level is accepted after either subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Diagnostics written to stderr (default: $RPSLS_LOG_LEVEL or WARNING)",
    )

    parser = argparse.ArgumentParser(prog="rpsls", description="Rock, Paper, Scissors, Lizard, Spock - best of 3")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", parents=[common], help="Play best-of-3 games against the computer")
    play.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the computer's moves (default: $RPSLS_SEED, else random)",
    )

    sub.add_parser("rules", parents=[common], help="Print which move beats which")

    args = parser.parse_args(argv)

    log_level = args.log_level or os.getenv("RPSLS_LOG_LEVEL", "").strip().upper() or "WARNING"
    if log_level not in LOG_LEVELS:
        parser.error(f"RPSLS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "rules":
        print(format_rules(CANONICAL_RULES))
        return 0

    if args.cmd == "play":
        seed = args.seed
        if seed is None:
            try:
                seed = _env_seed()
            except ValueError as exc:
                parser.error(str(exc))
        return _play(seed)

    raise SystemExit("unhandled command")


def _play(seed: int | None) -> int:
    human = ConsoleHuman(rules=CANONICAL_RULES, input_fn=input, output=print)
    computer = RandomOpponent(rules=CANONICAL_RULES, rng=random.Random(seed))
    match = Match(
        human_source=human,
        computer_source=computer,
        play_again_source=ConsolePlayAgain(input_fn=input),
        rules=CANONICAL_RULES,
        on_game_start=_show_game_intro,
        on_round=_show_round,
    )

    try:
        for result in match.games():
            _show_game_result(result, match.tally)
    except KeyboardInterrupt:
        # Ctrl+C still reports the games finished so far.
        print()
        _show_summary(match.summary())
        return 130

    _show_summary(match.summary())
    return 0


def _env_seed() -> int | None:
    raw = os.getenv("RPSLS_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"RPSLS_SEED must be an integer, got {raw!r}") from None


def format_rules(rules: RuleTable) -> str:
    lines: list[str] = []
    for move in rules.moves:
        beaten = [m for m in rules.moves if m in rules.defeated_by(move)]
        lines.append(f"{move.label:10} beats {', '.join(m.label for m in beaten)}")
    return "\n".join(lines)


def _show_game_intro(game_no: int) -> None:
    print(f"\nGame {game_no}: Ready to play Rock, Paper, Scissors, Lizard, Spock?")
    print("\nBest of 3.... Go!")
    print("\nChoose your weapon")


def _show_round(result: RoundResult) -> None:
    if result.outcome == "draw":
        print(f"  DRAW... play again!! ({result.human} same as {result.computer})")
        return
    side = "HUMAN beats Computer" if result.outcome == "human_win" else "COMPUTER beats Human"
    print(f"  {side} ({result.winning_move} beats {result.losing_move})")


def _show_game_result(result: GameResult, tally: MatchTally) -> None:
    if result.abandoned:
        print("Human quits Best-of-3...")
    winner = result.winner.title()
    print(
        f"\n {winner.upper()}\n **** {winner} wins Best-Of-Three "
        f"(Human={result.human_rounds}, Computer={result.computer_rounds} - "
        f"game total is Human={tally.human_games_won} Computer={tally.computer_games_won})"
    )


def _show_summary(summary: MatchSummary) -> None:
    print(
        "Thank you for playing. The final game score was "
        f"Human={summary.human_games_won} and Computer={summary.computer_games_won}"
    )
    print(summary.format_table())


if __name__ == "__main__":
    raise SystemExit(main())
