from bet_league.scoring import MatchContext, MatchOutcome, MatchPrediction, ScorerRankedConfig
from bet_league.scoring.rules import (
    evaluate_draw,
    evaluate_exact_score,
    evaluate_one_team_score,
    evaluate_score_difference,
    evaluate_scorer,
    evaluate_soccer_playoff_advance,
    evaluate_winner,
)


def _context(home, away, actual_home, actual_away, **kwargs):
    prediction_fields = {
        key: kwargs.pop(key)
        for key in ("scorer_id", "no_scorer", "overtime", "home_advanced")
        if key in kwargs
    }
    kwargs.setdefault("home_final_score", actual_home)
    kwargs.setdefault("away_final_score", actual_away)
    return MatchContext(
        prediction=MatchPrediction(home, away, **prediction_fields),
        actual=MatchOutcome(actual_home, actual_away, **kwargs),
    )


RANKED = ScorerRankedConfig(ranked_points={1: 2, 2: 4, 3: 5}, unranked_points=8)


def test_exact_score_matches_regulation_result():
    assert evaluate_exact_score(_context(2, 1, 2, 1)) is True
    assert evaluate_exact_score(_context(2, 1, 1, 2)) is False


def test_exact_score_checks_overtime_call():
    context = _context(2, 2, 2, 2, overtime=False, home_final_score=3, is_overtime=True)
    assert evaluate_exact_score(context) is False

    context = _context(2, 2, 2, 2, overtime=True, home_final_score=3, is_shootout=True)
    assert evaluate_exact_score(context) is True


def test_exact_score_without_overtime_flag_ignores_extra_time():
    context = _context(1, 1, 1, 1, overtime=None, home_final_score=2, is_overtime=True)
    assert evaluate_exact_score(context) is True


def test_score_rules_need_regulation_scores():
    context = _context(1, 0, None, None)
    assert evaluate_exact_score(context) is False
    assert evaluate_score_difference(context) is False
    assert evaluate_one_team_score(context) is False
    assert evaluate_draw(context) is False
    assert evaluate_winner(context) is False


def test_score_difference():
    assert evaluate_score_difference(_context(3, 1, 2, 0)) is True
    assert evaluate_score_difference(_context(3, 1, 2, 1)) is False


def test_one_team_score():
    assert evaluate_one_team_score(_context(3, 1, 3, 0)) is True
    assert evaluate_one_team_score(_context(3, 1, 0, 1)) is True
    assert evaluate_one_team_score(_context(3, 1, 2, 2)) is False


def test_winner_uses_final_scores():
    # 1:1 after regulation, home wins in overtime
    context = _context(2, 1, 1, 1, home_final_score=2, away_final_score=1, is_overtime=True)
    assert evaluate_winner(context) is True

    context = _context(1, 1, 1, 1, home_final_score=2, away_final_score=1, is_overtime=True)
    assert evaluate_winner(context) is False


def test_winner_predicted_draw():
    assert evaluate_winner(_context(0, 0, 2, 2)) is True
    assert evaluate_winner(_context(0, 0, 2, 1)) is False


def test_draw_requires_drawn_prediction_and_result():
    assert evaluate_draw(_context(1, 1, 3, 3)) is True
    assert evaluate_draw(_context(1, 1, 3, 2)) is False
    assert evaluate_draw(_context(2, 1, 3, 3)) is False


def test_scorer_boolean_mode():
    assert evaluate_scorer(_context(1, 0, 1, 0, scorer_id=7, scorer_ids=(7,))) is True
    assert evaluate_scorer(_context(1, 0, 1, 0, scorer_id=8, scorer_ids=(7,))) is False


def test_scorer_nothing_picked_never_scores():
    goalless = _context(0, 0, 0, 0)
    assert evaluate_scorer(goalless) is False
    assert evaluate_scorer(goalless, RANKED) == 0


def test_scorer_no_scorer_pick():
    assert evaluate_scorer(_context(0, 0, 0, 0, no_scorer=True)) is True
    assert evaluate_scorer(_context(0, 0, 0, 0, no_scorer=True), RANKED) == 8
    assert evaluate_scorer(_context(0, 0, 1, 0, no_scorer=True, scorer_ids=(7,)), RANKED) == 0


def test_scorer_ranked_points():
    rankings = {7: 1, 9: 3, 11: 12}
    context = _context(1, 0, 2, 1, scorer_id=7, scorer_ids=(7, 9, 11), scorer_rankings=rankings)
    assert evaluate_scorer(context, RANKED) == 2

    context = _context(1, 0, 2, 1, scorer_id=9, scorer_ids=(7, 9, 11), scorer_rankings=rankings)
    assert evaluate_scorer(context, RANKED) == 5


def test_scorer_rank_outside_config_gets_unranked_points():
    context = _context(1, 0, 1, 0, scorer_id=11, scorer_ids=(11,), scorer_rankings={11: 12})
    assert evaluate_scorer(context, RANKED) == 8


def test_scorer_without_ranking_data_gets_unranked_points():
    context = _context(1, 0, 1, 0, scorer_id=11, scorer_ids=(11,))
    assert evaluate_scorer(context, RANKED) == 8


def test_scorer_wrong_pick_is_zero_in_ranked_mode():
    context = _context(1, 0, 1, 0, scorer_id=5, scorer_ids=(11,), scorer_rankings={5: 1})
    assert evaluate_scorer(context, RANKED) == 0


def test_playoff_advance_only_for_playoff_games():
    playoff = MatchContext(
        prediction=MatchPrediction(1, 1, home_advanced=True),
        actual=MatchOutcome(1, 1, 1, 1, is_playoff_game=True, home_advanced=True),
    )
    assert evaluate_soccer_playoff_advance(playoff) is True

    regular = MatchContext(
        prediction=MatchPrediction(1, 1, home_advanced=True),
        actual=MatchOutcome(1, 1, 1, 1, is_playoff_game=False, home_advanced=True),
    )
    assert evaluate_soccer_playoff_advance(regular) is False


def test_playoff_advance_missing_values():
    no_pick = MatchContext(
        prediction=MatchPrediction(1, 1),
        actual=MatchOutcome(1, 1, 1, 1, is_playoff_game=True, home_advanced=False),
    )
    assert evaluate_soccer_playoff_advance(no_pick) is False

    wrong = MatchContext(
        prediction=MatchPrediction(1, 1, home_advanced=True),
        actual=MatchOutcome(1, 1, 1, 1, is_playoff_game=True, home_advanced=False),
    )
    assert evaluate_soccer_playoff_advance(wrong) is False
