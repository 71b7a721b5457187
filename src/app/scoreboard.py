from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Side = Literal["human", "computer"]


@dataclass(frozen=True)
class MatchSummary:
    human_games_won: int = 0
    computer_games_won: int = 0

    @property
    def games_played(self) -> int:
        return self.human_games_won + self.computer_games_won

    def format_table(self) -> str:
        if self.games_played == 0:
            return "(no games yet)"

        lines: list[str] = []
        header = f"{'player':10}  {'games won':>9}"
        lines.append(header)
        lines.append("-" * len(header))
        lines.append(f"{'Human':10}  {self.human_games_won:>9}")
        lines.append(f"{'Computer':10}  {self.computer_games_won:>9}")
        return "\n".join(lines)


@dataclass
class MatchTally:
    # Lives for one process run only.
    human_games_won: int = 0
    computer_games_won: int = 0

    def record_win(self, side: Side) -> None:
        if side == "human":
            self.human_games_won += 1
        elif side == "computer":
            self.computer_games_won += 1
        else:
            raise ValueError(f"unknown side {side!r}")

    def summary(self) -> MatchSummary:
        return MatchSummary(
            human_games_won=self.human_games_won,
            computer_games_won=self.computer_games_won,
        )
