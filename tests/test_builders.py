from types import SimpleNamespace

import pytest

from bet_league.scoring import (
    ValidationError,
    build_closest_value_context,
    build_group_stage_context,
    build_match_context,
    build_question_context,
    build_series_context,
    build_special_bet_context,
)


def _match_record(**kwargs):
    fields = {
        "home_regular_score": 2,
        "away_regular_score": 1,
        "home_final_score": 2,
        "away_final_score": 1,
        "is_overtime": False,
        "is_shootout": False,
        "is_playoff_game": None,
        "home_advanced": None,
        "scorers": [SimpleNamespace(scorer_id=7), SimpleNamespace(scorer_id=9)],
    }
    fields.update(kwargs)
    return SimpleNamespace(**fields)


def _match_bet(**kwargs):
    fields = {
        "home_score": 2,
        "away_score": 1,
        "scorer_id": 7,
        "no_scorer": None,
        "overtime": False,
        "home_advanced": None,
    }
    fields.update(kwargs)
    return SimpleNamespace(**fields)


def test_build_match_context():
    context = build_match_context(_match_bet(), _match_record(), {7: 1})

    assert context.prediction.home_score == 2
    assert context.prediction.scorer_id == 7
    assert context.actual.scorer_ids == (7, 9)
    assert context.actual.scorer_rankings[7] == 1
    assert context.actual.is_playoff_game is False


def test_build_match_context_requires_prediction_scores():
    with pytest.raises(ValidationError):
        build_match_context(_match_bet(home_score=None), _match_record())


def test_build_match_context_keeps_missing_result():
    context = build_match_context(
        _match_bet(), _match_record(home_regular_score=None, away_regular_score=None, scorers=[])
    )
    assert not context.actual.has_regular_scores


def test_build_series_context():
    bet = SimpleNamespace(home_team_score=4, away_team_score=1)
    series = SimpleNamespace(home_team_score=4, away_team_score=3)

    context = build_series_context(bet, series)
    assert context.prediction.home_team_score == 4
    assert context.actual.away_team_score == 3


def test_build_special_bet_context():
    bet = SimpleNamespace(team_result_id=3, player_result_id=None, value=None)
    special_bet = SimpleNamespace(team_result_id=3, player_result_id=None, value=None)

    context = build_special_bet_context(bet, special_bet)
    assert context.prediction.team_result_id == context.actual.team_result_id == 3


def test_build_closest_value_context_collects_pool():
    bets = [SimpleNamespace(value=v) for v in (90.0, None, 120.0)]
    special_bet = SimpleNamespace(value=100.0)

    context = build_closest_value_context(bets[0], special_bet, bets)
    assert context.prediction == 90.0
    assert context.all_predictions == (90.0, 120.0)


def test_build_closest_value_context_requires_values():
    special_bet = SimpleNamespace(value=100.0)
    with pytest.raises(ValidationError, match="Value predictions required"):
        build_closest_value_context(SimpleNamespace(value=None), special_bet, [])

    with pytest.raises(ValidationError):
        build_closest_value_context(SimpleNamespace(value=5.0), SimpleNamespace(value=None), [])


def test_build_group_stage_context():
    bet = SimpleNamespace(team_result_id=2)
    special_bet = SimpleNamespace(team_result_id=1)

    context = build_group_stage_context(bet, special_bet, [2, 3])
    assert context.actual.winner_team_id == 1
    assert context.actual.advanced_team_ids == frozenset({2, 3})


def test_build_group_stage_context_requires_winner():
    with pytest.raises(ValidationError):
        build_group_stage_context(
            SimpleNamespace(team_result_id=2), SimpleNamespace(team_result_id=None), [2]
        )


def test_build_question_context():
    question = SimpleNamespace(result=True)

    assert build_question_context(SimpleNamespace(user_bet=False), question).prediction is False
    assert build_question_context(SimpleNamespace(user_bet=None), question).prediction is None


def test_build_question_context_requires_result():
    with pytest.raises(ValidationError):
        build_question_context(SimpleNamespace(user_bet=True), SimpleNamespace(result=None))
