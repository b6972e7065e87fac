from datetime import datetime, timezone

from sqlalchemy import or_

from bet_league import db


class ScorerRankingVersion(db.Model):
    """
    Top-scorer ranking of a player, valid from effective_from until
    effective_to (open-ended while current). Matches are scored with the
    rankings valid at kick-off.
    """

    __tablename__ = "scorer_ranking_versions"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    league_player_id = db.Column(
        db.Integer, db.ForeignKey("league_players.id"), nullable=False
    )
    ranking = db.Column(db.Integer, nullable=False)

    effective_from = db.Column(db.DateTime, nullable=False)
    effective_to = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    created_by_user_id = db.Column(db.Integer, db.ForeignKey("users.id"))

    __table_args__ = (
        db.Index("idx_ranking_league_from", "league_id", "effective_from"),
        db.Index("idx_ranking_player_from", "league_player_id", "effective_from"),
    )

    def __repr__(self):
        return f"<ScorerRankingVersion player={self.league_player_id} rank={self.ranking}>"

    @staticmethod
    def set_ranking(league_id, league_player_id, ranking, effective_from, user_id=None):
        """Close the player's current ranking and open a new version"""
        current = ScorerRankingVersion.query.filter_by(
            league_id=league_id, league_player_id=league_player_id, effective_to=None
        ).first()
        if current:
            current.effective_to = effective_from

        version = ScorerRankingVersion(
            league_id=league_id,
            league_player_id=league_player_id,
            ranking=ranking,
            effective_from=effective_from,
            created_by_user_id=user_id,
        )
        db.session.add(version)
        return version

    @staticmethod
    def rankings_at(league_id, player_ids, when=None):
        """
        Rankings of the given players valid at `when`

        Args:
            league_id: League ID
            player_ids: League player IDs to look up
            when: Point in time; current rankings if None

        Returns:
            dict: league player id -> ranking (players without a ranking omitted)
        """
        player_ids = list(player_ids)
        if not player_ids:
            return {}

        query = ScorerRankingVersion.query.filter(
            ScorerRankingVersion.league_id == league_id,
            ScorerRankingVersion.league_player_id.in_(player_ids),
        )

        if when is None:
            query = query.filter(ScorerRankingVersion.effective_to.is_(None))
        else:
            query = query.filter(
                ScorerRankingVersion.effective_from <= when,
                or_(
                    ScorerRankingVersion.effective_to.is_(None),
                    ScorerRankingVersion.effective_to > when,
                ),
            )

        versions = query.order_by(ScorerRankingVersion.effective_from).all()
        # Later versions win if periods overlap
        return {version.league_player_id: version.ranking for version in versions}
