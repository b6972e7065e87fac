"""
Rule coordinator

Applies a league's configured rules to one prediction. Rules run in a fixed
priority order per category; within an exclusion group the first rule that
awards wins and later members of the group score 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError
from .registry import (
    RuleCategory,
    RuleKind,
    RuleName,
    get_category,
    get_evaluator,
    get_kind,
    resolve_rule,
)
from .types import GroupStageConfig, ScorerRankedConfig

RULE_PRIORITY = {
    RuleCategory.MATCH: (
        RuleName.EXACT_SCORE,
        RuleName.SCORE_DIFFERENCE,
        RuleName.ONE_TEAM_SCORE,
        RuleName.DRAW,
        RuleName.WINNER,
        RuleName.SCORER,
        RuleName.SOCCER_PLAYOFF_ADVANCE,
    ),
    RuleCategory.SERIES: (RuleName.SERIES_EXACT, RuleName.SERIES_WINNER),
    RuleCategory.SPECIAL: (
        RuleName.EXACT_TEAM,
        RuleName.EXACT_PLAYER,
        RuleName.EXACT_VALUE,
        RuleName.CLOSEST_VALUE,
        RuleName.GROUP_STAGE_TEAM,
    ),
    RuleCategory.QUESTION: (RuleName.QUESTION,),
}

EXCLUSION_GROUPS = (
    (RuleName.EXACT_SCORE, RuleName.SCORE_DIFFERENCE, RuleName.ONE_TEAM_SCORE),
    (RuleName.EXACT_SCORE, RuleName.DRAW),
    (RuleName.SERIES_EXACT, RuleName.SERIES_WINNER),
)

_CONFIG_TYPES = {
    RuleName.SCORER: ScorerRankedConfig,
    RuleName.GROUP_STAGE_TEAM: GroupStageConfig,
}


def _priority(rule):
    order = RULE_PRIORITY[get_category(rule)]
    return order.index(rule)


def excluded_by(rule):
    """Rules that prevent `rule` from awarding once they have awarded"""
    blockers = set()
    for group in EXCLUSION_GROUPS:
        if rule in group:
            blockers.update(member for member in group if member is not rule)
    return blockers


def scale_points(multiplier, points):
    """Scale configured points by a rule multiplier, rounding halves up"""
    return int(math.floor(multiplier * points + 0.5))


@dataclass(frozen=True)
class RuleSetting:
    """One rule as configured for a league: points and optional config"""

    rule: RuleName
    points: int = 0
    config: Any = None

    def __post_init__(self):
        rule = resolve_rule(self.rule)
        if rule is None:
            raise ConfigurationError(f"Unknown evaluator type: {self.rule}")
        object.__setattr__(self, "rule", rule)

    @property
    def name(self):
        return self.rule.value

    @property
    def category(self):
        return get_category(self.rule)

    @classmethod
    def from_config(cls, rule_name, points, raw_config=None):
        """Build a setting from stored values, parsing the JSON config"""
        rule = resolve_rule(rule_name)
        if rule is None:
            raise ConfigurationError(f"Unknown evaluator type: {rule_name}")

        config = None
        config_type = _CONFIG_TYPES.get(rule)
        if raw_config and config_type is not None:
            config = config_type.from_dict(raw_config)

        return cls(rule=rule, points=int(points or 0), config=config)


def apply_rule(setting, context):
    """
    Run one rule and convert its result into points.

    Returns:
        tuple: (awarded, points)
    """
    evaluator = get_evaluator(setting.rule)
    kind = get_kind(setting.rule)

    if kind is RuleKind.BOOLEAN:
        awarded = bool(evaluator(context))
        return awarded, setting.points if awarded else 0

    if kind is RuleKind.RANKED:
        if setting.config is None:
            awarded = bool(evaluator(context))
            return awarded, setting.points if awarded else 0
        points = int(evaluator(context, setting.config))
        return points != 0, points

    if kind is RuleKind.MULTIPLIER:
        points = scale_points(evaluator(context), setting.points)
        return points != 0, points

    if kind is RuleKind.TIERED:
        if setting.config is None:
            raise ConfigurationError(f"{setting.name} evaluator requires config")
        points = int(evaluator(context, setting.config))
        return points != 0, points

    raise ConfigurationError(f"Unsupported rule kind for {setting.name}")


def score_prediction(context, settings):
    """
    Score one prediction against every configured rule.

    Args:
        context: Evaluation context of the settings' category
        settings: Iterable of RuleSetting for one category

    Returns:
        dict: rule name -> points, in priority order
    """
    ordered = sorted(settings, key=lambda setting: _priority(setting.rule))

    categories = {setting.category for setting in ordered}
    if len(categories) > 1:
        names = ", ".join(sorted(category.value for category in categories))
        raise ConfigurationError(f"Cannot score mixed rule categories together: {names}")

    seen = set()
    for setting in ordered:
        if setting.rule in seen:
            raise ConfigurationError(f"Evaluator {setting.name} is configured twice")
        seen.add(setting.rule)

    awarded_rules = set()
    rule_points = {}

    for setting in ordered:
        if excluded_by(setting.rule) & awarded_rules:
            rule_points[setting.name] = 0
            continue

        awarded, points = apply_rule(setting, context)
        if awarded:
            awarded_rules.add(setting.rule)
        rule_points[setting.name] = points

    return rule_points
