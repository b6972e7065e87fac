"""
Special bet rules

Single-result bets (team, player or value), the comparative closest-value
rule and the three-tier group-stage rule.
"""

from decimal import Decimal

CLOSEST_VALUE_EXACT = 1.0
CLOSEST_VALUE_NEAREST = 1 / 3


def _decimal(value):
    # Shortest decimal form, so 0.4 - 0.3 and 0.3 - 0.2 are the same distance
    return Decimal(str(value))


def _same(predicted, actual):
    if predicted is None or actual is None:
        return False
    return predicted == actual


def evaluate_exact_team(context):
    return _same(context.prediction.team_result_id, context.actual.team_result_id)


def evaluate_exact_player(context):
    return _same(context.prediction.player_result_id, context.actual.player_result_id)


def evaluate_exact_value(context):
    return _same(context.prediction.value, context.actual.value)


def evaluate_closest_value(context):
    """
    Point multiplier for hard-to-guess values (attendance, viewers, ...).

    Exact guess earns the full points (1.0). The guess nearest to the result
    earns a third of them; everyone tied for nearest is rewarded. The rest
    earn nothing.

    Args:
        context: ClosestValueContext with every submitted value

    Returns:
        float: 1.0, 1/3 or 0
    """
    if not context.all_predictions:
        return 0

    actual = _decimal(context.actual)
    own_diff = abs(_decimal(context.prediction) - actual)
    if own_diff == 0:
        return CLOSEST_VALUE_EXACT

    nearest = min(abs(_decimal(value) - actual) for value in context.all_predictions)
    if own_diff == nearest:
        return CLOSEST_VALUE_NEAREST

    return 0


def evaluate_group_stage_team(context, config):
    """Winner points for the group winner, advance points for other advancing teams"""
    team_id = context.prediction
    if team_id is None:
        return 0

    if context.actual.winner_team_id is not None and team_id == context.actual.winner_team_id:
        return config.winner_points

    if team_id in context.actual.advanced_team_ids:
        return config.advance_points

    return 0
