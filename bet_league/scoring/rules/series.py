"""Series bet rules (best-of-N series, no draws)"""


def _series_leader(home, away):
    if home > away:
        return "home"
    if away > home:
        return "away"
    return "draw"


def _both_complete(context):
    return context.prediction.is_complete and context.actual.is_complete


def evaluate_series_exact(context):
    if not _both_complete(context):
        return False

    prediction, actual = context.prediction, context.actual
    return (
        prediction.home_team_score == actual.home_team_score
        and prediction.away_team_score == actual.away_team_score
    )


def evaluate_series_winner(context):
    """Predicted series winner is correct (the exact result is handled separately)"""
    if not _both_complete(context):
        return False

    prediction, actual = context.prediction, context.actual
    predicted = _series_leader(prediction.home_team_score, prediction.away_team_score)
    final = _series_leader(actual.home_team_score, actual.away_team_score)
    return predicted == final
