from enum import StrEnum

from pydantic import Field

from backoffice.domain.shared.error import ValidationError
from backoffice.domain.shared.model.value import ValueObject


class TournamentStatus(StrEnum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Score(ValueObject):
    """Win/loss/draw record, serialised as ``"W-L-D"``."""

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)

    @classmethod
    def parse(cls, text: str | None) -> "Score":
        """Parse ``"3-1-0"``; a missing or blank score is ``0-0-0``."""
        if not text or not text.strip():
            return cls()
        parts = text.strip().split("-")
        if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
            raise ValidationError(f"Score must look like W-L-D, got {text!r}", field="score")
        wins, losses, draws = (int(p) for p in parts)
        return cls(wins=wins, losses=losses, draws=draws)

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    def add(self, wins: int = 0, losses: int = 0, draws: int = 0) -> "Score":
        return Score(wins=self.wins + wins, losses=self.losses + losses, draws=self.draws + draws)

    def __str__(self) -> str:
        return f"{self.wins}-{self.losses}-{self.draws}"
