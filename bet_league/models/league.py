from datetime import datetime, timezone

from sqlalchemy import func

from bet_league import db
from bet_league.scoring import (
    ConfigurationError,
    RuleSetting,
    get_category,
    is_group_stage_rule,
    resolve_rule,
)


class League(db.Model):
    __tablename__ = "leagues"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    season_from = db.Column(db.Integer)
    season_to = db.Column(db.Integer)

    # Status
    is_active = db.Column(db.Boolean, default=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime)

    # Relationships
    evaluators = db.relationship(
        "LeagueEvaluator", backref="league", lazy="dynamic", cascade="all, delete-orphan"
    )
    teams = db.relationship("LeagueTeam", backref="league", lazy="dynamic")

    def __repr__(self):
        return f"<League {self.name}>"

    def get_evaluators(self, category=None):
        """Active evaluators of this league, optionally for one category"""
        query = self.evaluators.filter(LeagueEvaluator.deleted_at.is_(None))
        if category is not None:
            query = query.filter(LeagueEvaluator.entity == getattr(category, "value", category))
        return query.order_by(LeagueEvaluator.rule_name).all()

    @staticmethod
    def get_leaderboard(league_id):
        """
        Sum evaluated points of every bet type per user

        Args:
            league_id: League ID

        Returns:
            list: dicts with user_id, per-type points and total, best first
        """
        from .bet import UserBet
        from .match import LeagueMatch
        from .question import LeagueQuestion, UserQuestionBet
        from .series import LeagueSeries, UserSeriesBet
        from .special_bet import LeagueSpecialBet, UserSpecialBet

        sources = [
            ("match_points", UserBet, LeagueMatch, UserBet.league_match_id),
            ("series_points", UserSeriesBet, LeagueSeries, UserSeriesBet.series_id),
            ("special_points", UserSpecialBet, LeagueSpecialBet, UserSpecialBet.special_bet_id),
            ("question_points", UserQuestionBet, LeagueQuestion, UserQuestionBet.question_id),
        ]

        rows = {}
        for key, bet_model, event_model, foreign_key in sources:
            totals = (
                db.session.query(bet_model.user_id, func.sum(bet_model.total_points))
                .join(event_model, foreign_key == event_model.id)
                .filter(
                    event_model.league_id == league_id,
                    bet_model.deleted_at.is_(None),
                )
                .group_by(bet_model.user_id)
                .all()
            )
            for user_id, points in totals:
                entry = rows.setdefault(
                    user_id,
                    {
                        "user_id": user_id,
                        "match_points": 0,
                        "series_points": 0,
                        "special_points": 0,
                        "question_points": 0,
                    },
                )
                entry[key] = int(points or 0)

        leaderboard = []
        for entry in rows.values():
            entry["total_points"] = (
                entry["match_points"]
                + entry["series_points"]
                + entry["special_points"]
                + entry["question_points"]
            )
            leaderboard.append(entry)

        # Highest total first, user id keeps ties stable
        leaderboard.sort(key=lambda x: (-x["total_points"], x["user_id"]))

        for position, entry in enumerate(leaderboard, start=1):
            entry["position"] = position

        return leaderboard


class LeagueEvaluator(db.Model):
    """A scoring rule enabled for a league, with its points and config"""

    __tablename__ = "league_evaluators"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    # Rule identification
    rule_name = db.Column(db.String(50), nullable=False)  # e.g. 'exact_score'
    entity = db.Column(db.String(20), nullable=False)  # match, series, special, question
    name = db.Column(db.String(100))  # Display name

    # Scoring
    points = db.Column(db.Integer, nullable=False, default=0)
    config = db.Column(db.JSON, nullable=True)  # Rank table or group-stage tiers

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime)

    __table_args__ = (
        db.Index("idx_league_evaluator_league_entity", "league_id", "entity"),
    )

    def __repr__(self):
        return f"<LeagueEvaluator {self.rule_name} ({self.points} pts) league={self.league_id}>"

    @property
    def rule(self):
        """RuleName for the stored identifier (None if unknown)"""
        return resolve_rule(self.rule_name)

    def to_setting(self):
        """Convert to a RuleSetting; raises ConfigurationError for unknown or bad config"""
        return RuleSetting.from_config(self.rule_name, self.points, self.config)

    @staticmethod
    def create(league_id, rule_name, points, config=None, name=None):
        """Create an evaluator, validating the rule name and its config"""
        setting = RuleSetting.from_config(rule_name, points, config)
        if is_group_stage_rule(setting.rule) and setting.config is None:
            raise ConfigurationError("Group stage evaluator requires config")

        evaluator = LeagueEvaluator(
            league_id=league_id,
            rule_name=setting.name,
            entity=get_category(setting.rule).value,
            name=name or setting.name.replace("_", " ").capitalize(),
            points=setting.points,
            config=setting.config.to_dict() if setting.config is not None else None,
        )
        db.session.add(evaluator)
        return evaluator

    def to_dict(self):
        return {
            "id": self.id,
            "league_id": self.league_id,
            "rule_name": self.rule_name,
            "entity": self.entity,
            "name": self.name,
            "points": self.points,
            "config": self.config,
        }
