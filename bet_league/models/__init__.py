from bet_league import db  # noqa: F401 - imported for model imports

from .bet import UserBet
from .evaluation_audit import EvaluationAudit
from .league import League, LeagueEvaluator
from .match import LeagueMatch, Match, MatchScorer
from .question import LeagueQuestion, UserQuestionBet
from .scorer_ranking import ScorerRankingVersion
from .series import LeagueSeries, UserSeriesBet
from .special_bet import LeagueSpecialBet, SpecialBetAdvancedTeam, UserSpecialBet
from .team import LeaguePlayer, LeagueTeam
from .user import User

__all__ = [
    "User",
    "League",
    "LeagueEvaluator",
    "LeagueTeam",
    "LeaguePlayer",
    "Match",
    "MatchScorer",
    "LeagueMatch",
    "UserBet",
    "LeagueSeries",
    "UserSeriesBet",
    "LeagueSpecialBet",
    "SpecialBetAdvancedTeam",
    "UserSpecialBet",
    "LeagueQuestion",
    "UserQuestionBet",
    "ScorerRankingVersion",
    "EvaluationAudit",
]
