from datetime import datetime, timezone

from bet_league import db


class UserBet(db.Model):
    """A user's prediction for one league match"""

    __tablename__ = "user_bets"

    id = db.Column(db.Integer, primary_key=True)
    league_match_id = db.Column(
        db.Integer, db.ForeignKey("league_matches.id"), nullable=False
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    # Prediction
    home_score = db.Column(db.Integer, nullable=False)
    away_score = db.Column(db.Integer, nullable=False)
    scorer_id = db.Column(db.Integer, db.ForeignKey("league_players.id"))
    no_scorer = db.Column(db.Boolean)  # Explicit "nobody scores" pick
    overtime = db.Column(db.Boolean, default=False, nullable=False)
    home_advanced = db.Column(db.Boolean)  # Playoff games only

    # Result of the last evaluation (overwritten on every run)
    total_points = db.Column(db.Integer, default=0, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime)

    # Relationships
    user = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("league_match_id", "user_id", name="unique_user_match_bet"),
        db.Index("idx_user_bet_user", "user_id"),
    )

    def __repr__(self):
        return f"<UserBet user_id={self.user_id} {self.home_score}:{self.away_score}>"

    def to_dict(self):
        return {
            "id": self.id,
            "league_match_id": self.league_match_id,
            "user_id": self.user_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "scorer_id": self.scorer_id,
            "no_scorer": self.no_scorer,
            "overtime": self.overtime,
            "home_advanced": self.home_advanced,
            "total_points": self.total_points,
        }
