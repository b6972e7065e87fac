"""
Bet League Evaluation Service

Scores every prediction of one finished event (match, series, special bet or
question) with the league's configured rules and stores the totals. Each run
writes all totals of the event in one transaction, and re-running overwrites
the previous totals instead of adding to them.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from bet_league import db
from bet_league.models import (
    EvaluationAudit,
    League,
    LeagueMatch,
    LeagueQuestion,
    LeagueSeries,
    LeagueSpecialBet,
    Match,
    ScorerRankingVersion,
    UserBet,
    UserQuestionBet,
    UserSeriesBet,
    UserSpecialBet,
)
from bet_league.scoring import (
    ConfigurationError,
    NotFoundError,
    RuleCategory,
    RuleName,
    ScoringError,
    ValidationError,
    build_closest_value_context,
    build_group_stage_context,
    build_match_context,
    build_question_context,
    build_series_context,
    build_special_bet_context,
    is_closest_value_rule,
    is_group_stage_rule,
    score_prediction,
)
from bet_league.utils.logging_config import ContextualLogger

logger = logging.getLogger(__name__)


@dataclass
class UserEvaluation:
    user_id: int
    bet_id: int
    total_points: int
    rule_points: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "bet_id": self.bet_id,
            "total_points": self.total_points,
            "rule_points": dict(self.rule_points),
        }


@dataclass
class EvaluationSummary:
    resource_type: str
    resource_id: int
    league_id: int
    results: list = field(default_factory=list)
    single_user: bool = False

    @property
    def total_users_evaluated(self):
        return len(self.results)

    @property
    def total_points(self):
        return sum(result.total_points for result in self.results)

    def points_for_user(self, user_id):
        for result in self.results:
            if result.user_id == user_id:
                return result.total_points
        return None

    def to_dict(self):
        return {
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "league_id": self.league_id,
            "single_user": self.single_user,
            "total_users_evaluated": self.total_users_evaluated,
            "total_points": self.total_points,
            "results": [result.to_dict() for result in self.results],
        }


def _active_bets(query, model, user_id=None):
    query = query.filter(model.deleted_at.is_(None))
    if user_id is not None:
        query = query.filter(model.user_id == user_id)
    return query.order_by(model.id).all()


def _load_settings(league, category):
    """RuleSettings of the league for one category"""
    evaluators = league.get_evaluators(category)
    if not evaluators:
        raise ConfigurationError(
            f"No {category.value} evaluators configured for league {league.id}"
        )

    settings = []
    for evaluator in evaluators:
        setting = evaluator.to_setting()
        if setting.category is not category:
            raise ConfigurationError(
                f"Evaluator {evaluator.rule_name} is stored as {evaluator.entity} "
                f"but scores {setting.category.value} bets"
            )
        settings.append(setting)
    return settings


class EvaluationService:
    """Evaluates finished events and persists the points of every bet"""

    def __init__(self):
        self.stats = {
            "last_run": None,
            "total_runs": 0,
            "successful_runs": 0,
            "failed_runs": 0,
            "last_error": None,
        }

    # Public API

    def evaluate_match(self, league_match_id, user_id=None, admin_user_id=None):
        """
        Evaluate all bets (or one user's bet) of a league match

        Args:
            league_match_id: LeagueMatch ID
            user_id: Evaluate only this user's bet
            admin_user_id: Admin who triggered the run, for the audit log

        Returns:
            EvaluationSummary
        """
        return self._run("match", league_match_id, user_id, admin_user_id, self._evaluate_match)

    def evaluate_series(self, series_id, user_id=None, admin_user_id=None):
        return self._run("series", series_id, user_id, admin_user_id, self._evaluate_series)

    def evaluate_special_bet(self, special_bet_id, user_id=None, admin_user_id=None):
        return self._run(
            "special_bet", special_bet_id, user_id, admin_user_id, self._evaluate_special_bet
        )

    def evaluate_question(self, question_id, user_id=None, admin_user_id=None):
        return self._run(
            "question", question_id, user_id, admin_user_id, self._evaluate_question
        )

    def reevaluate_league(self, league_id, admin_user_id=None):
        """
        Re-run evaluation of every finished event of a league

        Used after a rule or point change. Every event is its own transaction;
        a failing event is logged and skipped.

        Returns:
            dict: 'evaluated' summaries and 'failed' (resource, id, error) tuples
        """
        league = db.session.get(League, league_id)
        if league is None or league.deleted_at is not None:
            raise NotFoundError(f"League {league_id} not found")

        jobs = []

        league_matches = (
            LeagueMatch.query.join(Match, LeagueMatch.match_id == Match.id)
            .filter(
                LeagueMatch.league_id == league_id,
                LeagueMatch.deleted_at.is_(None),
                Match.home_regular_score.isnot(None),
                Match.away_regular_score.isnot(None),
            )
            .order_by(Match.date_time, LeagueMatch.id)
            .all()
        )
        jobs.extend(("match", lm.id, self.evaluate_match) for lm in league_matches)

        series_list = (
            LeagueSeries.query.filter(
                LeagueSeries.league_id == league_id,
                LeagueSeries.deleted_at.is_(None),
                LeagueSeries.home_team_score.isnot(None),
                LeagueSeries.away_team_score.isnot(None),
            )
            .order_by(LeagueSeries.id)
            .all()
        )
        jobs.extend(("series", series.id, self.evaluate_series) for series in series_list)

        special_bets = (
            LeagueSpecialBet.query.filter(
                LeagueSpecialBet.league_id == league_id,
                LeagueSpecialBet.deleted_at.is_(None),
            )
            .order_by(LeagueSpecialBet.id)
            .all()
        )
        jobs.extend(
            ("special_bet", special_bet.id, self.evaluate_special_bet)
            for special_bet in special_bets
            if special_bet.has_result
        )

        questions = (
            LeagueQuestion.query.filter(
                LeagueQuestion.league_id == league_id,
                LeagueQuestion.deleted_at.is_(None),
                LeagueQuestion.result.isnot(None),
            )
            .order_by(LeagueQuestion.id)
            .all()
        )
        jobs.extend(("question", question.id, self.evaluate_question) for question in questions)

        evaluated = []
        failed = []
        for resource_type, resource_id, evaluate in jobs:
            try:
                evaluated.append(evaluate(resource_id, admin_user_id=admin_user_id))
            except ScoringError as e:
                failed.append((resource_type, resource_id, e.message))
            except SQLAlchemyError as e:
                failed.append((resource_type, resource_id, str(e)))

        logger.info(
            f"Re-evaluated league {league_id}: {len(evaluated)} events, {len(failed)} failed"
        )
        return {"evaluated": evaluated, "failed": failed}

    def get_stats(self):
        return dict(self.stats)

    # Run wrapper

    def _run(self, resource_type, resource_id, user_id, admin_user_id, evaluate):
        log = ContextualLogger(__name__, {"resource": resource_type, "id": resource_id})
        if user_id is not None:
            log = log.bind(user_id=user_id)

        started = time.monotonic()
        self.stats["total_runs"] += 1
        self.stats["last_run"] = datetime.now(timezone.utc)

        try:
            league_id, results = evaluate(resource_id, user_id)
            summary = EvaluationSummary(
                resource_type=resource_type,
                resource_id=resource_id,
                league_id=league_id,
                results=results,
                single_user=user_id is not None,
            )
            duration_ms = int((time.monotonic() - started) * 1000)

            if current_app.config.get("EVALUATION_AUDIT_ENABLED", True):
                EvaluationAudit.log_evaluation(
                    resource_type=resource_type,
                    resource_id=resource_id,
                    league_id=league_id,
                    affected_users=summary.total_users_evaluated,
                    total_points=summary.total_points,
                    duration_ms=duration_ms,
                    admin_user_id=admin_user_id,
                    event_metadata={"user_id": user_id} if user_id is not None else None,
                )

            db.session.commit()

        except ScoringError as e:
            db.session.rollback()
            self._record_failure(e.message)
            log.warning(f"Evaluation refused: {e.message}")
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            self._record_failure(str(e))
            log.exception("Evaluation failed - database error")
            raise
        except Exception as e:
            db.session.rollback()
            self._record_failure(str(e))
            log.exception("Evaluation failed - unexpected error")
            raise

        self.stats["successful_runs"] += 1
        log.info(
            f"Evaluated {summary.total_users_evaluated} bets, "
            f"{summary.total_points} points awarded in {duration_ms}ms"
        )
        return summary

    def _record_failure(self, message):
        self.stats["failed_runs"] += 1
        self.stats["last_error"] = message

    # Per-category evaluation (no commit)

    def _evaluate_match(self, league_match_id, user_id):
        league_match = db.session.get(LeagueMatch, league_match_id)
        if league_match is None or league_match.deleted_at is not None:
            raise NotFoundError(f"League match {league_match_id} not found")

        match = league_match.match
        if not match.is_finished:
            raise ValidationError("Cannot evaluate match without results")

        settings = _load_settings(league_match.league, RuleCategory.MATCH)

        rankings = None
        if any(s.rule is RuleName.SCORER and s.config is not None for s in settings):
            rankings = ScorerRankingVersion.rankings_at(
                league_match.league_id,
                [scorer.scorer_id for scorer in match.scorers],
                match.date_time,
            )

        multiplier = 1
        if league_match.is_doubled:
            multiplier = current_app.config.get("DOUBLED_MATCH_MULTIPLIER", 2)

        results = []
        for bet in _active_bets(league_match.bets, UserBet, user_id):
            context = build_match_context(bet, match, rankings)
            rule_points = score_prediction(context, settings)
            total = sum(rule_points.values()) * multiplier

            bet.total_points = total
            results.append(UserEvaluation(bet.user_id, bet.id, total, rule_points))

        if user_id is None:
            match.is_evaluated = True

        return league_match.league_id, results

    def _evaluate_series(self, series_id, user_id):
        series = db.session.get(LeagueSeries, series_id)
        if series is None or series.deleted_at is not None:
            raise NotFoundError(f"Series {series_id} not found")

        if not series.is_finished:
            raise ValidationError("Cannot evaluate series without results")

        settings = _load_settings(series.league, RuleCategory.SERIES)

        results = []
        for bet in _active_bets(series.bets, UserSeriesBet, user_id):
            context = build_series_context(bet, series)
            rule_points = score_prediction(context, settings)
            total = sum(rule_points.values())

            bet.total_points = total
            results.append(UserEvaluation(bet.user_id, bet.id, total, rule_points))

        if user_id is None:
            series.is_evaluated = True

        return series.league_id, results

    def _evaluate_special_bet(self, special_bet_id, user_id):
        special_bet = db.session.get(LeagueSpecialBet, special_bet_id)
        if special_bet is None or special_bet.deleted_at is not None:
            raise NotFoundError(f"Special bet {special_bet_id} not found")

        if not special_bet.has_result:
            raise ValidationError("Cannot evaluate special bet without result")

        evaluator = special_bet.evaluator
        if evaluator is None or evaluator.deleted_at is not None:
            raise ConfigurationError("No evaluator configured for this special bet")

        setting = evaluator.to_setting()
        if setting.category is not RuleCategory.SPECIAL:
            raise ConfigurationError(
                f"Evaluator {evaluator.rule_name} cannot score special bets"
            )

        # The closest-value pool always holds every user's guess
        all_bets = None
        if is_closest_value_rule(setting.rule):
            all_bets = _active_bets(special_bet.bets, UserSpecialBet)

        results = []
        for bet in _active_bets(special_bet.bets, UserSpecialBet, user_id):
            if is_closest_value_rule(setting.rule):
                if bet.value is None:
                    rule_points = {setting.name: 0}
                else:
                    context = build_closest_value_context(bet, special_bet, all_bets)
                    rule_points = score_prediction(context, [setting])
            elif is_group_stage_rule(setting.rule):
                context = build_group_stage_context(
                    bet, special_bet, special_bet.advanced_team_ids
                )
                rule_points = score_prediction(context, [setting])
            else:
                context = build_special_bet_context(bet, special_bet)
                rule_points = score_prediction(context, [setting])

            total = sum(rule_points.values())
            bet.total_points = total
            results.append(UserEvaluation(bet.user_id, bet.id, total, rule_points))

        if user_id is None:
            special_bet.is_evaluated = True

        return special_bet.league_id, results

    def _evaluate_question(self, question_id, user_id):
        question = db.session.get(LeagueQuestion, question_id)
        if question is None or question.deleted_at is not None:
            raise NotFoundError(f"Question {question_id} not found")

        if question.result is None:
            raise ValidationError("Question result must be set before evaluation")

        settings = _load_settings(question.league, RuleCategory.QUESTION)

        results = []
        for bet in _active_bets(question.bets, UserQuestionBet, user_id):
            context = build_question_context(bet, question)
            rule_points = score_prediction(context, settings)
            total = sum(rule_points.values())

            bet.total_points = total
            results.append(UserEvaluation(bet.user_id, bet.id, total, rule_points))

        if user_id is None:
            question.is_evaluated = True

        return question.league_id, results


evaluation_service = EvaluationService()
