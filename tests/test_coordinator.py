import pytest

from bet_league.scoring import (
    ClosestValueContext,
    ConfigurationError,
    GroupStageContext,
    GroupStageOutcome,
    MatchContext,
    MatchOutcome,
    MatchPrediction,
    QuestionContext,
    RuleName,
    RuleSetting,
    ScorerRankedConfig,
    SeriesContext,
    SeriesScore,
    apply_rule,
    scale_points,
    score_prediction,
)
from bet_league.scoring.coordinator import excluded_by

MATCH_RULES = [
    RuleSetting(RuleName.EXACT_SCORE, 5),
    RuleSetting(RuleName.SCORE_DIFFERENCE, 3),
    RuleSetting(RuleName.ONE_TEAM_SCORE, 1),
    RuleSetting(RuleName.DRAW, 2),
    RuleSetting(RuleName.WINNER, 1),
]


def _match(home, away, actual_home, actual_away, **kwargs):
    prediction = MatchPrediction(
        home, away, overtime=kwargs.pop("overtime", False), scorer_id=kwargs.pop("scorer_id", None)
    )
    return MatchContext(
        prediction=prediction,
        actual=MatchOutcome(actual_home, actual_away, actual_home, actual_away, **kwargs),
    )


def test_exact_draw_excludes_difference_and_draw():
    points = score_prediction(_match(2, 2, 2, 2), MATCH_RULES)

    assert points == {
        "exact_score": 5,
        "score_difference": 0,
        "one_team_score": 0,
        "draw": 0,
        "winner": 1,
    }


def test_score_difference_without_exact_score():
    points = score_prediction(_match(2, 0, 3, 1), MATCH_RULES)

    assert points["exact_score"] == 0
    assert points["score_difference"] == 3
    assert points["one_team_score"] == 0
    assert points["winner"] == 1


def test_one_team_score_when_higher_rules_fail():
    points = score_prediction(_match(2, 0, 2, 1), MATCH_RULES)

    assert points["score_difference"] == 0
    assert points["one_team_score"] == 1
    assert points["winner"] == 1


def test_draw_awards_when_exact_score_misses():
    points = score_prediction(_match(1, 1, 3, 3), MATCH_RULES)

    assert points["exact_score"] == 0
    assert points["score_difference"] == 3
    assert points["one_team_score"] == 0
    assert points["draw"] == 2
    assert points["winner"] == 1


def test_at_most_one_score_rule_awards():
    cases = [(2, 2, 2, 2), (2, 0, 3, 1), (2, 0, 2, 1), (0, 3, 1, 0), (1, 1, 1, 1)]
    score_rules = ("exact_score", "score_difference", "one_team_score")

    for case in cases:
        points = score_prediction(_match(*case), MATCH_RULES)
        awarded = [name for name in score_rules if points[name] > 0]
        assert len(awarded) <= 1, case


def test_exact_score_missed_on_overtime_call():
    context = _match(2, 2, 2, 2, overtime=False, is_overtime=True)
    points = score_prediction(context, MATCH_RULES)

    assert points["exact_score"] == 0
    assert points["score_difference"] == 3
    assert points["draw"] == 2


def test_unconfigured_rules_do_not_exclude():
    points = score_prediction(_match(2, 2, 2, 2), [RuleSetting(RuleName.ONE_TEAM_SCORE, 1)])
    assert points == {"one_team_score": 1}


def test_settings_are_applied_in_priority_order():
    shuffled = list(reversed(MATCH_RULES))
    assert list(score_prediction(_match(1, 0, 1, 0), shuffled)) == [
        "exact_score",
        "score_difference",
        "one_team_score",
        "draw",
        "winner",
    ]


def test_scoring_is_idempotent():
    context = _match(3, 1, 2, 0)
    assert score_prediction(context, MATCH_RULES) == score_prediction(context, MATCH_RULES)


def test_series_exact_excludes_series_winner():
    settings = [RuleSetting(RuleName.SERIES_WINNER, 2), RuleSetting(RuleName.SERIES_EXACT, 5)]
    exact = SeriesContext(SeriesScore(4, 2), SeriesScore(4, 2))
    winner_only = SeriesContext(SeriesScore(4, 0), SeriesScore(4, 2))

    assert score_prediction(exact, settings) == {"series_exact": 5, "series_winner": 0}
    assert score_prediction(winner_only, settings) == {"series_exact": 0, "series_winner": 2}


def test_flat_scorer_awards_configured_points():
    context = _match(1, 0, 1, 0, scorer_ids=(7,), scorer_id=7)
    assert score_prediction(context, [RuleSetting(RuleName.SCORER, 3)]) == {"scorer": 3}


def test_ranked_scorer_returns_rank_points():
    config = ScorerRankedConfig(ranked_points={1: 2, 2: 4}, unranked_points=8)
    context = _match(1, 0, 1, 0, scorer_ids=(7,), scorer_id=7, scorer_rankings={7: 2})

    assert score_prediction(context, [RuleSetting(RuleName.SCORER, 3, config)]) == {"scorer": 4}


def test_closest_value_scaled_half_up():
    setting = RuleSetting(RuleName.CLOSEST_VALUE, 5)
    nearest = ClosestValueContext(prediction=90, actual=100, all_predictions=(90, 80))
    exact = ClosestValueContext(prediction=100, actual=100, all_predictions=(100, 80))

    assert apply_rule(setting, nearest) == (True, 2)
    assert apply_rule(setting, exact) == (True, 5)


def test_question_penalty_is_rounded_half_up():
    setting = RuleSetting(RuleName.QUESTION, 5)

    assert score_prediction(QuestionContext(True, True), [setting]) == {"question": 5}
    assert score_prediction(QuestionContext(False, True), [setting]) == {"question": -2}
    assert score_prediction(QuestionContext(None, True), [setting]) == {"question": 0}


def test_group_stage_requires_config():
    context = GroupStageContext(prediction=1, actual=GroupStageOutcome(1, {2}))

    with pytest.raises(ConfigurationError):
        score_prediction(context, [RuleSetting(RuleName.GROUP_STAGE_TEAM, 0)])


def test_duplicate_rules_rejected():
    settings = [RuleSetting(RuleName.WINNER, 1), RuleSetting(RuleName.WINNER, 2)]

    with pytest.raises(ConfigurationError):
        score_prediction(_match(1, 0, 1, 0), settings)


def test_mixed_categories_rejected():
    settings = [RuleSetting(RuleName.WINNER, 1), RuleSetting(RuleName.SERIES_WINNER, 2)]

    with pytest.raises(ConfigurationError):
        score_prediction(_match(1, 0, 1, 0), settings)


def test_unknown_rule_rejected():
    with pytest.raises(ConfigurationError):
        RuleSetting("halftime_score", 2)


def test_excluded_by():
    assert excluded_by(RuleName.DRAW) == {RuleName.EXACT_SCORE}
    assert excluded_by(RuleName.EXACT_SCORE) == {
        RuleName.SCORE_DIFFERENCE,
        RuleName.ONE_TEAM_SCORE,
        RuleName.DRAW,
    }
    assert excluded_by(RuleName.WINNER) == set()


def test_scale_points():
    assert scale_points(1.0, 4) == 4
    assert scale_points(1 / 3, 10) == 3
    assert scale_points(1 / 3, 5) == 2
    assert scale_points(0.5, 3) == 2
    assert scale_points(-0.5, 3) == -1
    assert scale_points(0, 10) == 0
