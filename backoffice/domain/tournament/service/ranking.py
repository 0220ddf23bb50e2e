"""Tournament standings: canonical ranking and match bookkeeping.

Two ranking operations exist on purpose. ``rank_standings`` reorders the list
into canonical order; ``apply_ranks`` writes the same rank numbers but keeps
the caller's display order. Callers pick the one they need.

Canonical order: wins desc, win rate desc, losses asc. Ties keep their input
order and still get distinct, consecutive rank numbers.
"""

from collections.abc import Iterable, Sequence

from backoffice.domain.tournament.model.tournament import MatchResult, Standing, Tournament
from backoffice.domain.tournament.model.value import Score


def _sort_key(standing: Standing) -> tuple[int, float, int]:
    score = standing.score
    return (-score.wins, -score.win_rate, score.losses)


def _canonical_order(standings: Sequence[Standing]) -> list[int]:
    """Indices of ``standings`` in canonical order (stable)."""
    return sorted(range(len(standings)), key=lambda i: _sort_key(standings[i]))


def rank_standings(standings: Sequence[Standing]) -> list[Standing]:
    """Sort into canonical order and renumber ranks 1..n."""
    order = _canonical_order(standings)
    return [
        standings[i].model_copy(update={"rank": rank}) for rank, i in enumerate(order, start=1)
    ]


def apply_ranks(standings: Sequence[Standing]) -> list[Standing]:
    """Assign canonical rank numbers without reordering the list."""
    ranks = {i: rank for rank, i in enumerate(_canonical_order(standings), start=1)}
    return [s.model_copy(update={"rank": ranks[i]}) for i, s in enumerate(standings)]


def record_match(
    standings: Sequence[Standing],
    winner_id: str,
    loser_id: str,
    draw: bool = False,
) -> list[Standing]:
    """Add one match to both players' scores. Unknown players leave standings unchanged."""
    ids = {s.user_id for s in standings}
    if winner_id not in ids or loser_id not in ids or winner_id == loser_id:
        return list(standings)

    def updated(standing: Standing) -> Standing:
        if standing.user_id == winner_id:
            score = standing.score.add(draws=1) if draw else standing.score.add(wins=1)
        elif standing.user_id == loser_id:
            score = standing.score.add(draws=1) if draw else standing.score.add(losses=1)
        else:
            return standing
        return standing.model_copy(update={"score": score})

    return [updated(s) for s in standings]


def record_matches(standings: Sequence[Standing], results: Iterable[MatchResult]) -> list[Standing]:
    current = list(standings)
    for result in results:
        current = record_match(current, result.winner_id, result.loser_id, result.draw)
    return current


def add_standing(standings: Sequence[Standing], user_id: str) -> list[Standing]:
    """Append a fresh ``0-0-0`` standing ranked last; no-op if already present."""
    if any(s.user_id == user_id for s in standings):
        return list(standings)
    return [*standings, Standing(user_id=user_id, rank=len(standings) + 1, score=Score())]


def remove_standing(standings: Sequence[Standing], user_id: str) -> list[Standing]:
    return [s for s in standings if s.user_id != user_id]


def standings_from_participants(
    participants: Sequence[str],
    existing: Sequence[Standing] = (),
) -> list[Standing]:
    """One standing per participant, keeping any existing standing as is."""
    by_user = {s.user_id: s for s in existing}
    return [
        by_user.get(user_id) or Standing(user_id=user_id, rank=position, score=Score())
        for position, user_id in enumerate(participants, start=1)
    ]


def generate_standings(tournament: Tournament) -> Tournament:
    """Rebuild the standings table from the current participant list."""
    return tournament.with_standings(
        standings_from_participants(tournament.participants, tournament.standings)
    )
