"""
Bet evaluation engine

Pure scoring for league bets: contexts, builders, rules, the rule registry
and the coordinator that applies a league's rules with mutual exclusion.
Nothing in this package touches the database.
"""

from .builders import (
    build_closest_value_context,
    build_group_stage_context,
    build_match_context,
    build_question_context,
    build_series_context,
    build_special_bet_context,
)
from .coordinator import (
    EXCLUSION_GROUPS,
    RULE_PRIORITY,
    RuleSetting,
    apply_rule,
    scale_points,
    score_prediction,
)
from .errors import ConfigurationError, NotFoundError, ScoringError, ValidationError
from .registry import (
    RuleCategory,
    RuleKind,
    RuleName,
    get_category,
    get_evaluator,
    get_kind,
    is_closest_value_rule,
    is_group_stage_rule,
    is_question_rule,
    is_ranked_scorer_rule,
    resolve_rule,
    supported_rule_names,
)
from .types import (
    ClosestValueContext,
    GroupStageConfig,
    GroupStageContext,
    GroupStageOutcome,
    MatchContext,
    MatchOutcome,
    MatchPrediction,
    QuestionContext,
    ScorerRankedConfig,
    SeriesContext,
    SeriesScore,
    SpecialBetContext,
    SpecialResult,
)

__all__ = [
    "build_match_context",
    "build_series_context",
    "build_special_bet_context",
    "build_closest_value_context",
    "build_group_stage_context",
    "build_question_context",
    "EXCLUSION_GROUPS",
    "RULE_PRIORITY",
    "RuleSetting",
    "apply_rule",
    "scale_points",
    "score_prediction",
    "ScoringError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "RuleCategory",
    "RuleKind",
    "RuleName",
    "get_category",
    "get_evaluator",
    "get_kind",
    "is_closest_value_rule",
    "is_group_stage_rule",
    "is_question_rule",
    "is_ranked_scorer_rule",
    "resolve_rule",
    "supported_rule_names",
    "ClosestValueContext",
    "GroupStageConfig",
    "GroupStageContext",
    "GroupStageOutcome",
    "MatchContext",
    "MatchOutcome",
    "MatchPrediction",
    "QuestionContext",
    "ScorerRankedConfig",
    "SeriesContext",
    "SeriesScore",
    "SpecialBetContext",
    "SpecialResult",
]
