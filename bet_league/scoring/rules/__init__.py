from .match import (
    evaluate_draw,
    evaluate_exact_score,
    evaluate_one_team_score,
    evaluate_score_difference,
    evaluate_scorer,
    evaluate_soccer_playoff_advance,
    evaluate_winner,
)
from .question import evaluate_question
from .series import evaluate_series_exact, evaluate_series_winner
from .special import (
    evaluate_closest_value,
    evaluate_exact_player,
    evaluate_exact_team,
    evaluate_exact_value,
    evaluate_group_stage_team,
)

__all__ = [
    "evaluate_exact_score",
    "evaluate_score_difference",
    "evaluate_one_team_score",
    "evaluate_winner",
    "evaluate_draw",
    "evaluate_scorer",
    "evaluate_soccer_playoff_advance",
    "evaluate_series_exact",
    "evaluate_series_winner",
    "evaluate_exact_team",
    "evaluate_exact_player",
    "evaluate_exact_value",
    "evaluate_closest_value",
    "evaluate_group_stage_team",
    "evaluate_question",
]
