from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from backoffice.domain.shared.error import ValidationError
from backoffice.domain.shared.model.value import CamelValueObject, ValueObject
from backoffice.domain.tournament.model.value import Score, TournamentStatus


class FinishStats(CamelValueObject):
    spin_finishes: int = 0
    over_finishes: int = 0
    burst_finishes: int = 0
    extreme_finishes: int = 0


class Player(CamelValueObject):
    id: str
    name: str
    email: str
    avatar: str = ""
    beyblade_stats: FinishStats = FinishStats()


class Standing(CamelValueObject):
    user_id: str
    rank: int = Field(ge=1)
    score: Score = Score()
    notes: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def parse_score(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return Score.parse(value)
        return value

    @field_serializer("score")
    def serialize_score(self, score: Score) -> str:
        return str(score)


class Tournament(CamelValueObject):
    id: str | None = Field(default=None, alias="_id")
    name: str = Field(min_length=1)
    date: datetime
    game: str = Field(min_length=1)
    season: int = 1
    status: TournamentStatus = TournamentStatus.SCHEDULED
    participants: tuple[str, ...] = ()
    max_players: int = Field(default=16, ge=1)
    standings: tuple[Standing, ...] = ()

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.max_players

    def toggle_participant(self, player_id: str) -> "Tournament":
        """Remove the player if registered, otherwise register them."""
        if player_id in self.participants:
            remaining = tuple(p for p in self.participants if p != player_id)
            return self.model_copy(update={"participants": remaining})
        if self.is_full:
            raise ValidationError(
                f"Tournament is full ({self.max_players} players)", field="participants"
            )
        return self.model_copy(update={"participants": (*self.participants, player_id)})

    def with_standings(self, standings: list[Standing]) -> "Tournament":
        return self.model_copy(update={"standings": tuple(standings)})


class MatchResult(ValueObject):
    winner_id: str
    loser_id: str
    draw: bool = False
