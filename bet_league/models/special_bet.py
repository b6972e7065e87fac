from datetime import datetime, timezone

from bet_league import db


class LeagueSpecialBet(db.Model):
    """
    A league-wide bet with a single result: a team, a player or a value.

    Group-stage bets use the team result as the group winner and list the
    remaining advancing teams in SpecialBetAdvancedTeam.
    """

    __tablename__ = "league_special_bets"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    evaluator_id = db.Column(db.Integer, db.ForeignKey("league_evaluators.id"))

    name = db.Column(db.String(200), nullable=False)
    group = db.Column(db.String(20))  # Group label for group-stage bets
    date_time = db.Column(db.DateTime, nullable=False)

    # Result (one of them, depending on the evaluator)
    team_result_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"))
    player_result_id = db.Column(db.Integer, db.ForeignKey("league_players.id"))
    value = db.Column(db.Float)

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
    evaluator = db.relationship("LeagueEvaluator")
    advanced_teams = db.relationship(
        "SpecialBetAdvancedTeam",
        backref="special_bet",
        lazy="select",
        cascade="all, delete-orphan",
    )
    bets = db.relationship(
        "UserSpecialBet", backref="special_bet", lazy="dynamic", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<LeagueSpecialBet {self.name}>"

    @property
    def has_result(self):
        return (
            self.team_result_id is not None
            or self.player_result_id is not None
            or self.value is not None
        )

    @property
    def advanced_team_ids(self):
        return [row.league_team_id for row in self.advanced_teams if row.deleted_at is None]

    def set_result(self, team_result_id=None, player_result_id=None, value=None):
        self.team_result_id = team_result_id
        self.player_result_id = player_result_id
        self.value = value
        self.is_evaluated = False

    def set_advanced_teams(self, team_ids):
        """Replace the advancing teams of a group-stage bet"""
        now = datetime.now(timezone.utc)
        wanted = set(team_ids)
        for row in self.advanced_teams:
            if row.deleted_at is None and row.league_team_id not in wanted:
                row.deleted_at = now
        current = set(self.advanced_team_ids)
        for team_id in team_ids:
            if team_id not in current:
                self.advanced_teams.append(SpecialBetAdvancedTeam(league_team_id=team_id))
                current.add(team_id)
        self.is_evaluated = False


class SpecialBetAdvancedTeam(db.Model):
    __tablename__ = "special_bet_advanced_teams"

    id = db.Column(db.Integer, primary_key=True)
    special_bet_id = db.Column(
        db.Integer, db.ForeignKey("league_special_bets.id"), nullable=False
    )
    league_team_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"), nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    deleted_at = db.Column(db.DateTime)

    __table_args__ = (db.Index("idx_advanced_team_special_bet", "special_bet_id"),)


class UserSpecialBet(db.Model):
    __tablename__ = "user_special_bets"

    id = db.Column(db.Integer, primary_key=True)
    special_bet_id = db.Column(
        db.Integer, db.ForeignKey("league_special_bets.id"), nullable=False
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    team_result_id = db.Column(db.Integer, db.ForeignKey("league_teams.id"))
    player_result_id = db.Column(db.Integer, db.ForeignKey("league_players.id"))
    value = db.Column(db.Float)

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
        db.UniqueConstraint("special_bet_id", "user_id", name="unique_user_special_bet"),
    )

    def __repr__(self):
        return f"<UserSpecialBet user_id={self.user_id} special_bet={self.special_bet_id}>"
