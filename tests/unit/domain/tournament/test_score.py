import pytest

from backoffice.domain.shared.error import ValidationError
from backoffice.domain.tournament.model.tournament import Standing
from backoffice.domain.tournament.model.value import Score


class TestScore:
    def test_parse_and_format(self) -> None:
        score = Score.parse("3-1-2")
        assert (score.wins, score.losses, score.draws) == (3, 1, 2)
        assert str(score) == "3-1-2"

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_zero(self, text: str | None) -> None:
        assert Score.parse(text) == Score()

    @pytest.mark.parametrize("text", ["3-1", "a-b-c", "3--1"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(ValidationError):
            Score.parse(text)

    def test_win_rate(self) -> None:
        assert Score.parse("3-1-0").win_rate == 0.75
        assert Score().win_rate == 0.0


class TestStandingRecord:
    def test_score_round_trips_as_text(self) -> None:
        standing = Standing.model_validate({"userId": "p1", "rank": 1, "score": "2-0-1"})
        assert standing.score.wins == 2
        assert standing.model_dump(by_alias=True)["score"] == "2-0-1"
