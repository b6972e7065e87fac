"""
Context builders

Translate stored prediction and result records into evaluation contexts.
Builders only read attributes of already-loaded records; they never query.
Missing data that a bet category requires raises ValidationError instead of
producing an empty context.
"""

from .errors import ValidationError
from .types import (
    ClosestValueContext,
    GroupStageContext,
    GroupStageOutcome,
    MatchContext,
    MatchOutcome,
    MatchPrediction,
    QuestionContext,
    SeriesContext,
    SeriesScore,
    SpecialBetContext,
    SpecialResult,
)


def build_match_context(bet, match, scorer_rankings=None):
    """
    Build a MatchContext from a user bet and its match.

    Args:
        bet: UserBet-like record
        match: Match-like record with a `scorers` collection
        scorer_rankings: Optional {league player id: ranking} valid at kick-off

    Returns:
        MatchContext
    """
    if bet.home_score is None or bet.away_score is None:
        raise ValidationError("Match prediction requires home and away scores")

    scorer_ids = tuple(scorer.scorer_id for scorer in match.scorers)

    return MatchContext(
        prediction=MatchPrediction(
            home_score=bet.home_score,
            away_score=bet.away_score,
            scorer_id=bet.scorer_id,
            no_scorer=bet.no_scorer,
            overtime=bet.overtime,
            home_advanced=bet.home_advanced,
        ),
        actual=MatchOutcome(
            home_regular_score=match.home_regular_score,
            away_regular_score=match.away_regular_score,
            home_final_score=match.home_final_score,
            away_final_score=match.away_final_score,
            scorer_ids=scorer_ids,
            scorer_rankings=scorer_rankings,
            is_overtime=match.is_overtime,
            is_shootout=match.is_shootout,
            is_playoff_game=bool(match.is_playoff_game),
            home_advanced=match.home_advanced,
        ),
    )


def build_series_context(bet, series):
    return SeriesContext(
        prediction=SeriesScore(bet.home_team_score, bet.away_team_score),
        actual=SeriesScore(series.home_team_score, series.away_team_score),
    )


def build_special_bet_context(bet, special_bet):
    return SpecialBetContext(
        prediction=SpecialResult(
            team_result_id=bet.team_result_id,
            player_result_id=bet.player_result_id,
            value=bet.value,
        ),
        actual=SpecialResult(
            team_result_id=special_bet.team_result_id,
            player_result_id=special_bet.player_result_id,
            value=special_bet.value,
        ),
    )


def build_closest_value_context(bet, special_bet, all_bets):
    """Closest-value context; `all_bets` are every user's bets on the same special bet"""
    if bet.value is None or special_bet.value is None:
        raise ValidationError("Value predictions required for closest_value evaluator")

    pool = tuple(other.value for other in all_bets if other.value is not None)

    return ClosestValueContext(
        prediction=bet.value,
        actual=special_bet.value,
        all_predictions=pool,
    )


def build_group_stage_context(bet, special_bet, advanced_team_ids):
    """Group-stage context; the group winner is the special bet's team result"""
    if special_bet.team_result_id is None:
        raise ValidationError("Group stage result requires a winning team")

    return GroupStageContext(
        prediction=bet.team_result_id,
        actual=GroupStageOutcome(
            winner_team_id=special_bet.team_result_id,
            advanced_team_ids=frozenset(advanced_team_ids or ()),
        ),
    )


def build_question_context(bet, question):
    if question.result is None:
        raise ValidationError("Question must have a correct answer set")

    answer = None if bet.user_bet is None else bool(bet.user_bet)
    return QuestionContext(prediction=answer, actual=bool(question.result))
