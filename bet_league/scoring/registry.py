"""
Rule registry

Maps the rule identifiers stored in league configuration to evaluator
functions and bet categories. The set of rules is closed: every RuleName
member must be registered below, which is checked when the module is
imported.
"""

from collections import namedtuple
from enum import Enum

from .rules import (
    evaluate_closest_value,
    evaluate_draw,
    evaluate_exact_player,
    evaluate_exact_score,
    evaluate_exact_team,
    evaluate_exact_value,
    evaluate_group_stage_team,
    evaluate_one_team_score,
    evaluate_question,
    evaluate_score_difference,
    evaluate_scorer,
    evaluate_series_exact,
    evaluate_series_winner,
    evaluate_soccer_playoff_advance,
    evaluate_winner,
)


class RuleName(str, Enum):
    EXACT_SCORE = "exact_score"
    SCORE_DIFFERENCE = "score_difference"
    ONE_TEAM_SCORE = "one_team_score"
    WINNER = "winner"
    DRAW = "draw"
    SCORER = "scorer"
    SOCCER_PLAYOFF_ADVANCE = "soccer_playoff_advance"

    SERIES_EXACT = "series_exact"
    SERIES_WINNER = "series_winner"

    EXACT_TEAM = "exact_team"
    EXACT_PLAYER = "exact_player"
    EXACT_VALUE = "exact_value"
    CLOSEST_VALUE = "closest_value"
    GROUP_STAGE_TEAM = "group_stage_team"

    QUESTION = "question"


class RuleCategory(str, Enum):
    MATCH = "match"
    SERIES = "series"
    SPECIAL = "special"
    QUESTION = "question"


class RuleKind(str, Enum):
    BOOLEAN = "boolean"  # awards the configured points or nothing
    RANKED = "ranked"  # boolean without config, points with a rank table
    MULTIPLIER = "multiplier"  # fraction of the configured points
    TIERED = "tiered"  # points taken from its own config


RuleEntry = namedtuple("RuleEntry", ["evaluator", "category", "kind"])

_REGISTRY = {
    RuleName.EXACT_SCORE: RuleEntry(evaluate_exact_score, RuleCategory.MATCH, RuleKind.BOOLEAN),
    RuleName.SCORE_DIFFERENCE: RuleEntry(
        evaluate_score_difference, RuleCategory.MATCH, RuleKind.BOOLEAN
    ),
    RuleName.ONE_TEAM_SCORE: RuleEntry(
        evaluate_one_team_score, RuleCategory.MATCH, RuleKind.BOOLEAN
    ),
    RuleName.WINNER: RuleEntry(evaluate_winner, RuleCategory.MATCH, RuleKind.BOOLEAN),
    RuleName.DRAW: RuleEntry(evaluate_draw, RuleCategory.MATCH, RuleKind.BOOLEAN),
    RuleName.SCORER: RuleEntry(evaluate_scorer, RuleCategory.MATCH, RuleKind.RANKED),
    RuleName.SOCCER_PLAYOFF_ADVANCE: RuleEntry(
        evaluate_soccer_playoff_advance, RuleCategory.MATCH, RuleKind.BOOLEAN
    ),
    RuleName.SERIES_EXACT: RuleEntry(
        evaluate_series_exact, RuleCategory.SERIES, RuleKind.BOOLEAN
    ),
    RuleName.SERIES_WINNER: RuleEntry(
        evaluate_series_winner, RuleCategory.SERIES, RuleKind.BOOLEAN
    ),
    RuleName.EXACT_TEAM: RuleEntry(evaluate_exact_team, RuleCategory.SPECIAL, RuleKind.BOOLEAN),
    RuleName.EXACT_PLAYER: RuleEntry(
        evaluate_exact_player, RuleCategory.SPECIAL, RuleKind.BOOLEAN
    ),
    RuleName.EXACT_VALUE: RuleEntry(evaluate_exact_value, RuleCategory.SPECIAL, RuleKind.BOOLEAN),
    RuleName.CLOSEST_VALUE: RuleEntry(
        evaluate_closest_value, RuleCategory.SPECIAL, RuleKind.MULTIPLIER
    ),
    RuleName.GROUP_STAGE_TEAM: RuleEntry(
        evaluate_group_stage_team, RuleCategory.SPECIAL, RuleKind.TIERED
    ),
    RuleName.QUESTION: RuleEntry(evaluate_question, RuleCategory.QUESTION, RuleKind.MULTIPLIER),
}

_unregistered = [rule.value for rule in RuleName if rule not in _REGISTRY]
if _unregistered:
    raise RuntimeError(f"Rules without an evaluator: {', '.join(_unregistered)}")


def resolve_rule(rule_name):
    """Return the RuleName for a stored identifier, or None if unknown"""
    if isinstance(rule_name, RuleName):
        return rule_name
    try:
        return RuleName(rule_name)
    except ValueError:
        return None


def _entry(rule_name):
    rule = resolve_rule(rule_name)
    if rule is None:
        return None
    return _REGISTRY[rule]


def get_evaluator(rule_name):
    entry = _entry(rule_name)
    return entry.evaluator if entry else None


def get_category(rule_name):
    entry = _entry(rule_name)
    return entry.category if entry else None


def get_kind(rule_name):
    entry = _entry(rule_name)
    return entry.kind if entry else None


def is_ranked_scorer_rule(rule_name):
    return resolve_rule(rule_name) is RuleName.SCORER


def is_closest_value_rule(rule_name):
    return resolve_rule(rule_name) is RuleName.CLOSEST_VALUE


def is_group_stage_rule(rule_name):
    return resolve_rule(rule_name) is RuleName.GROUP_STAGE_TEAM


def is_question_rule(rule_name):
    return resolve_rule(rule_name) is RuleName.QUESTION


def supported_rule_names(category=None):
    """All rule identifiers, optionally limited to one category"""
    if category is not None:
        category = RuleCategory(category)
    return [
        rule.value
        for rule, entry in _REGISTRY.items()
        if category is None or entry.category is category
    ]
