from datetime import datetime, timedelta

import pytest

from bet_league import db
from bet_league.models import (
    League,
    LeagueEvaluator,
    LeagueQuestion,
    ScorerRankingVersion,
    UserBet,
    UserQuestionBet,
)
from bet_league.scoring import ConfigurationError, RuleCategory, RuleName
from bet_league.services.evaluation_service import evaluation_service

from conftest import KICKOFF


def test_set_result_defaults_final_scores(league_match):
    match = league_match.match
    match.set_result(3, 2)

    assert match.is_finished
    assert (match.home_final_score, match.away_final_score) == (3, 2)


def test_set_result_after_overtime(league_match):
    match = league_match.match
    match.is_evaluated = True
    match.set_result(2, 2, home_final_score=3, away_final_score=2, is_overtime=True)

    assert (match.home_regular_score, match.home_final_score) == (2, 3)
    assert match.is_evaluated is False


def test_create_evaluator_derives_entity(league):
    evaluator = LeagueEvaluator.create(league.id, "series_exact", 5)
    db.session.commit()

    assert evaluator.entity == "series"
    assert evaluator.rule is RuleName.SERIES_EXACT
    assert evaluator.name == "Series exact"


def test_create_evaluator_stores_normalized_config(league):
    evaluator = LeagueEvaluator.create(
        league.id, "scorer", 3, config={"ranked_points": {1: 2}, "unranked_points": 8}
    )
    db.session.commit()

    assert evaluator.config == {"rankedPoints": {"1": 2}, "unrankedPoints": 8}
    assert evaluator.to_setting().config.points_for_rank(1) == 2


def test_create_evaluator_rejects_unknown_rule(league):
    with pytest.raises(ConfigurationError):
        LeagueEvaluator.create(league.id, "halftime_score", 2)


def test_group_stage_evaluator_requires_config(league):
    with pytest.raises(ConfigurationError):
        LeagueEvaluator.create(league.id, "group_stage_team", 0)


def test_get_evaluators_by_category(league):
    LeagueEvaluator.create(league.id, "winner", 1)
    LeagueEvaluator.create(league.id, "exact_score", 5)
    LeagueEvaluator.create(league.id, "question", 4)
    removed = LeagueEvaluator.create(league.id, "draw", 2)
    removed.deleted_at = datetime(2024, 1, 1)
    db.session.commit()

    match_rules = [e.rule_name for e in league.get_evaluators(RuleCategory.MATCH)]
    assert match_rules == ["exact_score", "winner"]
    assert len(league.get_evaluators()) == 3


def test_rankings_at_picks_version_valid_at_time(league, players):
    ScorerRankingVersion.set_ranking(league.id, players[0].id, 5, KICKOFF - timedelta(days=30))
    db.session.commit()
    ScorerRankingVersion.set_ranking(league.id, players[0].id, 1, KICKOFF - timedelta(days=1))
    ScorerRankingVersion.set_ranking(league.id, players[1].id, 3, KICKOFF + timedelta(days=1))
    db.session.commit()

    ids = [player.id for player in players]
    assert ScorerRankingVersion.rankings_at(league.id, ids, KICKOFF - timedelta(days=7)) == {
        players[0].id: 5
    }
    assert ScorerRankingVersion.rankings_at(league.id, ids, KICKOFF) == {players[0].id: 1}
    assert ScorerRankingVersion.rankings_at(league.id, ids) == {
        players[0].id: 1,
        players[1].id: 3,
    }
    assert ScorerRankingVersion.rankings_at(league.id, [], KICKOFF) == {}


def test_leaderboard_sums_all_bet_types(league, users, match_rules, league_match):
    for user, (home, away) in zip(users, [(2, 1), (3, 2), (0, 0)]):
        db.session.add(
            UserBet(league_match_id=league_match.id, user_id=user.id, home_score=home, away_score=away)
        )
    league_match.match.set_result(2, 1)

    LeagueEvaluator.create(league.id, "question", 4)
    question = LeagueQuestion(league_id=league.id, text="Overtime in the final?", date_time=KICKOFF)
    db.session.add(question)
    db.session.flush()
    for user, answer in zip(users, [True, False, None]):
        db.session.add(UserQuestionBet(question_id=question.id, user_id=user.id, user_bet=answer))
    question.set_result(True)
    db.session.commit()

    evaluation_service.evaluate_match(league_match.id)
    evaluation_service.evaluate_question(question.id)

    leaderboard = League.get_leaderboard(league.id)

    assert [entry["user_id"] for entry in leaderboard] == [u.id for u in users]
    assert [entry["total_points"] for entry in leaderboard] == [10, 2, 0]
    assert leaderboard[0]["match_points"] == 6
    assert leaderboard[0]["question_points"] == 4
    assert leaderboard[1]["question_points"] == -2
    assert [entry["position"] for entry in leaderboard] == [1, 2, 3]


def test_leaderboard_of_other_league_is_empty(league, users, match_rules, league_match):
    other = League(name="Other League")
    db.session.add(other)
    db.session.commit()

    assert League.get_leaderboard(other.id) == []
