"""
Normalized evaluation contexts and rule configuration value objects.

Contexts are independent of how predictions and results are stored. They are
built fresh for every evaluation run and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ConfigurationError


@dataclass(frozen=True)
class MatchPrediction:
    home_score: int
    away_score: int
    scorer_id: int | None = None
    no_scorer: bool | None = None
    overtime: bool | None = None
    home_advanced: bool | None = None


@dataclass(frozen=True)
class MatchOutcome:
    home_regular_score: int | None
    away_regular_score: int | None
    home_final_score: int | None = None
    away_final_score: int | None = None
    scorer_ids: tuple[int, ...] = ()
    # league player id -> ranking at kick-off (None = unranked)
    scorer_rankings: Mapping[int, int | None] | None = None
    is_overtime: bool | None = None
    is_shootout: bool | None = None
    is_playoff_game: bool = False
    home_advanced: bool | None = None

    def __post_init__(self):
        object.__setattr__(self, "scorer_ids", tuple(self.scorer_ids))
        if self.scorer_rankings is not None:
            object.__setattr__(
                self, "scorer_rankings", MappingProxyType(dict(self.scorer_rankings))
            )

    @property
    def has_regular_scores(self):
        return self.home_regular_score is not None and self.away_regular_score is not None

    @property
    def has_final_scores(self):
        return self.home_final_score is not None and self.away_final_score is not None

    @property
    def went_to_extra_time(self):
        return bool(self.is_overtime) or bool(self.is_shootout)


@dataclass(frozen=True)
class MatchContext:
    prediction: MatchPrediction
    actual: MatchOutcome


@dataclass(frozen=True)
class SeriesScore:
    home_team_score: int | None
    away_team_score: int | None

    @property
    def is_complete(self):
        return self.home_team_score is not None and self.away_team_score is not None


@dataclass(frozen=True)
class SeriesContext:
    prediction: SeriesScore
    actual: SeriesScore


@dataclass(frozen=True)
class SpecialResult:
    team_result_id: int | None = None
    player_result_id: int | None = None
    value: float | None = None


@dataclass(frozen=True)
class SpecialBetContext:
    prediction: SpecialResult
    actual: SpecialResult


@dataclass(frozen=True)
class ClosestValueContext:
    prediction: float
    actual: float
    # Every submitted value for the bet, the caller's own included
    all_predictions: tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "all_predictions", tuple(self.all_predictions))


@dataclass(frozen=True)
class GroupStageOutcome:
    winner_team_id: int | None
    advanced_team_ids: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "advanced_team_ids", frozenset(self.advanced_team_ids))


@dataclass(frozen=True)
class GroupStageContext:
    prediction: int | None
    actual: GroupStageOutcome


@dataclass(frozen=True)
class QuestionContext:
    prediction: bool | None
    actual: bool


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if isinstance(value, float) and value != number:
        raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
    return number


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise ConfigurationError(f"Missing config key '{keys[0]}'")


@dataclass(frozen=True)
class ScorerRankedConfig:
    """Points per scorer rank, with a fallback for unranked scorers.

    Stored as JSON on the league's scorer rule, e.g.
    ``{"rankedPoints": {"1": 2, "2": 4, "3": 5}, "unrankedPoints": 8}``.
    Leagues may configure any number of ranks.
    """

    ranked_points: Mapping[int, int]
    unranked_points: int

    def __post_init__(self):
        object.__setattr__(
            self, "ranked_points", MappingProxyType(dict(self.ranked_points))
        )

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, Mapping):
            raise ConfigurationError("Scorer config must be an object")

        raw_ranks = _lookup(data, "rankedPoints", "ranked_points")
        if not isinstance(raw_ranks, Mapping):
            raise ConfigurationError("rankedPoints must be an object of rank -> points")

        ranked_points = {}
        for rank, points in raw_ranks.items():
            rank_number = _as_int(rank, "Rank")
            if rank_number < 1:
                raise ConfigurationError(f"Rank must be positive, got {rank!r}")
            ranked_points[rank_number] = _as_int(points, f"Points for rank {rank}")

        unranked = _as_int(
            _lookup(data, "unrankedPoints", "unranked_points"), "unrankedPoints"
        )
        return cls(ranked_points=ranked_points, unranked_points=unranked)

    def points_for_rank(self, rank):
        if rank is None:
            return self.unranked_points
        return self.ranked_points.get(rank, self.unranked_points)

    def to_dict(self):
        return {
            "rankedPoints": {str(rank): pts for rank, pts in sorted(self.ranked_points.items())},
            "unrankedPoints": self.unranked_points,
        }


@dataclass(frozen=True)
class GroupStageConfig:
    """Points for the group winner and for a merely advancing team"""

    winner_points: int
    advance_points: int

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, Mapping):
            raise ConfigurationError("Group stage config must be an object")
        return cls(
            winner_points=_as_int(
                _lookup(data, "winnerPoints", "winner_points"), "winnerPoints"
            ),
            advance_points=_as_int(
                _lookup(data, "advancePoints", "advance_points"), "advancePoints"
            ),
        )

    def to_dict(self):
        return {"winnerPoints": self.winner_points, "advancePoints": self.advance_points}
