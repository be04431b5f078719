"""Running counters for the local player. Kept in memory only."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Stats:
    shots_hit: int = 0
    shots_missed: int = 0
    games_won: int = 0
    games_played: int = 0

    def add_shot_hit(self) -> None:
        self.shots_hit += 1

    def add_shot_missed(self) -> None:
        self.shots_missed += 1

    def add_game_won(self) -> None:
        self.games_won += 1

    def add_game_played(self) -> None:
        self.games_played += 1

    @property
    def accuracy(self) -> float:
        total = self.shots_hit + self.shots_missed
        return self.shots_hit / total if total else 0.0

    def summary(self) -> str:
        return (
            f"Shots: {self.shots_hit} hit / {self.shots_missed} missed ({self.accuracy:.0%}) | "
            f"Games: {self.games_won} won of {self.games_played}"
        )
