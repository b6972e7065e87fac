"""
Match bet rules

All rules compare a MatchContext. Regulation-time scores decide the score
rules, final (post overtime/shootout) scores decide the winner. Overlap
between rules (exact score vs. score difference etc.) is resolved by the
coordinator, not here.
"""


def _outcome_side(home, away):
    """Return 'home', 'away' or 'draw' for a score pair"""
    if home > away:
        return "home"
    if away > home:
        return "away"
    return "draw"


def evaluate_exact_score(context):
    """Exact regulation score plus the right overtime/shootout call.

    A prediction without an overtime flag (None) is judged on the score alone.
    """
    prediction, actual = context.prediction, context.actual

    if not actual.has_regular_scores:
        return False

    if (
        prediction.home_score != actual.home_regular_score
        or prediction.away_score != actual.away_regular_score
    ):
        return False

    if prediction.overtime is None:
        return True

    return bool(prediction.overtime) == actual.went_to_extra_time


def evaluate_score_difference(context):
    prediction, actual = context.prediction, context.actual

    if not actual.has_regular_scores:
        return False

    predicted_diff = prediction.home_score - prediction.away_score
    actual_diff = actual.home_regular_score - actual.away_regular_score
    return predicted_diff == actual_diff


def evaluate_one_team_score(context):
    prediction, actual = context.prediction, context.actual

    if not actual.has_regular_scores:
        return False

    return (
        prediction.home_score == actual.home_regular_score
        or prediction.away_score == actual.away_regular_score
    )


def evaluate_winner(context):
    """Predicted winner (or draw) against the final result"""
    prediction, actual = context.prediction, context.actual

    if not actual.has_final_scores:
        return False

    predicted = _outcome_side(prediction.home_score, prediction.away_score)
    final = _outcome_side(actual.home_final_score, actual.away_final_score)
    return predicted == final


def evaluate_draw(context):
    prediction, actual = context.prediction, context.actual

    if not actual.has_regular_scores:
        return False

    return (
        prediction.home_score == prediction.away_score
        and actual.home_regular_score == actual.away_regular_score
    )


def evaluate_scorer(context, config=None):
    """
    Evaluate the scorer pick.

    Without config the result is a boolean. With a ScorerRankedConfig the
    result is the number of points: the configured points for the scorer's
    rank, unranked points when the rank is unknown or not configured (and for
    a correct "no scorer" call), 0 for a wrong pick.

    Args:
        context: MatchContext, optionally carrying scorer rankings
        config: Optional ScorerRankedConfig of the league

    Returns:
        bool without config, int with config
    """
    prediction, actual = context.prediction, context.actual

    if not actual.has_regular_scores:
        return 0 if config else False

    if prediction.no_scorer is True:
        correct = len(actual.scorer_ids) == 0
        if config:
            return config.unranked_points if correct else 0
        return correct

    # Nothing picked never scores, even when nobody scored
    if prediction.scorer_id is None or prediction.scorer_id not in actual.scorer_ids:
        return 0 if config else False

    if not config:
        return True

    rank = None
    if actual.scorer_rankings is not None:
        rank = actual.scorer_rankings.get(prediction.scorer_id)
    return config.points_for_rank(rank)


def evaluate_soccer_playoff_advance(context):
    prediction, actual = context.prediction, context.actual

    if not actual.is_playoff_game:
        return False

    if prediction.home_advanced is None or actual.home_advanced is None:
        return False

    return bool(prediction.home_advanced) == bool(actual.home_advanced)
