from datetime import datetime, timezone

from bet_league import db


class Match(db.Model):
    __tablename__ = "matches"

    id = db.Column(db.Integer, primary_key=True)

    # Teams
    home_team_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"), nullable=False)
    away_team_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"), nullable=False)

    # Match timing
    date_time = db.Column(db.DateTime, nullable=False)

    # Scores after regulation time
    home_regular_score = db.Column(db.Integer)
    away_regular_score = db.Column(db.Integer)

    # Scores after overtime / shootout
    home_final_score = db.Column(db.Integer)
    away_final_score = db.Column(db.Integer)

    # Match status
    is_overtime = db.Column(db.Boolean)
    is_shootout = db.Column(db.Boolean)
    is_playoff_game = db.Column(db.Boolean, default=False, nullable=False)
    home_advanced = db.Column(db.Boolean)  # Playoff games only
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
    scorers = db.relationship(
        "MatchScorer", backref="match", lazy="select", cascade="all, delete-orphan"
    )
    home_team = db.relationship("LeagueTeam", foreign_keys=[home_team_id])
    away_team = db.relationship("LeagueTeam", foreign_keys=[away_team_id])

    __table_args__ = (
        db.Index("idx_match_date_time", "date_time"),
        db.CheckConstraint("home_team_id != away_team_id", name="different_teams"),
    )

    def __repr__(self):
        return f"<Match {self.away_team_id} @ {self.home_team_id} {self.date_time}>"

    @property
    def is_finished(self):
        """Regulation result entered"""
        return self.home_regular_score is not None and self.away_regular_score is not None

    def set_result(
        self,
        home_regular_score,
        away_regular_score,
        home_final_score=None,
        away_final_score=None,
        is_overtime=False,
        is_shootout=False,
        home_advanced=None,
    ):
        """
        Enter or correct the match result.

        Final scores default to the regulation scores when the match ended in
        regulation. Correcting a result clears the evaluated flag so the match
        is evaluated again.
        """
        self.home_regular_score = home_regular_score
        self.away_regular_score = away_regular_score
        self.home_final_score = (
            home_final_score if home_final_score is not None else home_regular_score
        )
        self.away_final_score = (
            away_final_score if away_final_score is not None else away_regular_score
        )
        self.is_overtime = is_overtime
        self.is_shootout = is_shootout
        self.home_advanced = home_advanced
        self.is_evaluated = False

    def add_scorer(self, scorer_id, number_of_goals=1):
        scorer = MatchScorer(scorer_id=scorer_id, number_of_goals=number_of_goals)
        self.scorers.append(scorer)
        return scorer

    def to_dict(self):
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "date_time": self.date_time.isoformat() if self.date_time else None,
            "home_regular_score": self.home_regular_score,
            "away_regular_score": self.away_regular_score,
            "home_final_score": self.home_final_score,
            "away_final_score": self.away_final_score,
            "is_overtime": self.is_overtime,
            "is_shootout": self.is_shootout,
            "is_playoff_game": self.is_playoff_game,
            "home_advanced": self.home_advanced,
            "scorer_ids": [scorer.scorer_id for scorer in self.scorers],
            "is_evaluated": self.is_evaluated,
        }


class MatchScorer(db.Model):
    __tablename__ = "match_scorers"

    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey("matches.id"), nullable=False)
    scorer_id = db.Column(db.Integer, db.ForeignKey("league_players.id"), nullable=False)
    number_of_goals = db.Column(db.Integer, default=1, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("match_id", "scorer_id", name="unique_match_scorer"),
    )

    def __repr__(self):
        return f"<MatchScorer match={self.match_id} scorer={self.scorer_id}>"


class LeagueMatch(db.Model):
    """A match as part of a league's betting schedule"""

    __tablename__ = "league_matches"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    match_id = db.Column(db.Integer, db.ForeignKey("matches.id"), nullable=False)

    # Doubled matches count twice
    is_doubled = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    deleted_at = db.Column(db.DateTime)

    # Relationships
    league = db.relationship("League")
    match = db.relationship("Match", backref=db.backref("league_matches", lazy="dynamic"))
    bets = db.relationship(
        "UserBet", backref="league_match", lazy="dynamic", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("league_id", "match_id", name="unique_league_match"),
    )

    def __repr__(self):
        return f"<LeagueMatch league={self.league_id} match={self.match_id}>"
