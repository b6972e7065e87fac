from datetime import datetime, timezone

from bet_league import db


class LeagueSeries(db.Model):
    """A best-of-N playoff series users bet on"""

    __tablename__ = "league_series"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    home_team_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"), nullable=False)
    away_team_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"), nullable=False)
    date_time = db.Column(db.DateTime, nullable=False)

    # Final series result (games won)
    home_team_score = db.Column(db.Integer)
    away_team_score = db.Column(db.Integer)

    is_evaluated = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime)

    # Relationships
    league = db.relationship("League")
    bets = db.relationship(
        "UserSeriesBet", backref="series", lazy="dynamic", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<LeagueSeries {self.home_team_id} vs {self.away_team_id}>"

    @property
    def is_finished(self):
        return self.home_team_score is not None and self.away_team_score is not None

    def set_result(self, home_team_score, away_team_score):
        self.home_team_score = home_team_score
        self.away_team_score = away_team_score
        self.is_evaluated = False


class UserSeriesBet(db.Model):
    __tablename__ = "user_series_bets"

    id = db.Column(db.Integer, primary_key=True)
    series_id = db.Column(db.Integer, db.ForeignKey("league_series.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    home_team_score = db.Column(db.Integer)
    away_team_score = db.Column(db.Integer)

    total_points = db.Column(db.Integer, default=0, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    deleted_at = db.Column(db.DateTime)

    __table_args__ = (
        db.UniqueConstraint("series_id", "user_id", name="unique_user_series_bet"),
    )

    def __repr__(self):
        return f"<UserSeriesBet user_id={self.user_id} {self.home_team_score}:{self.away_team_score}>"
