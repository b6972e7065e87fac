from datetime import datetime, timezone

from bet_league import db


class LeagueTeam(db.Model):
    __tablename__ = "league_teams"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    # Team identification
    name = db.Column(db.String(100), nullable=False)
    abbreviation = db.Column(db.String(10), nullable=False, index=True)
    group = db.Column(db.String(20))  # Group-stage group label, e.g. "A"

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    deleted_at = db.Column(db.DateTime)

    # Relationships
    players = db.relationship("LeaguePlayer", backref="team", lazy="dynamic")

    __table_args__ = (db.Index("idx_league_team_league", "league_id"),)

    def __repr__(self):
        return f"<LeagueTeam {self.abbreviation}>"


class LeaguePlayer(db.Model):
    __tablename__ = "league_players"

    id = db.Column(db.Integer, primary_key=True)
    league_team_id = db.Column(
        db.Integer, db.ForeignKey("league_teams.id"), nullable=False
    )

    name = db.Column(db.String(100), nullable=False)
    position = db.Column(db.String(5))  # G, D, F

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    deleted_at = db.Column(db.DateTime)

    __table_args__ = (db.Index("idx_league_player_team", "league_team_id"),)

    def __repr__(self):
        return f"<LeaguePlayer {self.name}>"
