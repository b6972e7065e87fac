from datetime import datetime, timezone

from bet_league import db


class EvaluationAudit(db.Model):
    __tablename__ = "evaluation_audits"

    id = db.Column(db.Integer, primary_key=True)

    # Who triggered the evaluation (None for CLI / system runs)
    admin_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=True)

    # Event details
    event_type = db.Column(
        db.String(50), nullable=False
    )  # 'MATCH_EVALUATED', 'SERIES_EVALUATED', 'SPECIAL_BET_EVALUATED', 'QUESTION_EVALUATED'
    resource_type = db.Column(db.String(50), nullable=False)
    resource_id = db.Column(db.Integer, nullable=False)
    description = db.Column(db.String(500), nullable=False)

    # Outcome
    affected_users = db.Column(db.Integer, default=0, nullable=False)
    total_points = db.Column(db.Integer, default=0, nullable=False)
    duration_ms = db.Column(db.Integer)

    # Additional context data (JSON)
    event_metadata = db.Column(db.JSON, nullable=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    admin_user = db.relationship("User", foreign_keys=[admin_user_id])

    # Indexes
    __table_args__ = (
        db.Index("idx_evaluation_audit_resource", "resource_type", "resource_id"),
        db.Index("idx_evaluation_audit_league", "league_id"),
        db.Index("idx_evaluation_audit_created", "created_at"),
    )

    def __repr__(self):
        return f"<EvaluationAudit {self.event_type} {self.resource_type}={self.resource_id}>"

    @staticmethod
    def log_evaluation(
        resource_type,
        resource_id,
        league_id,
        affected_users,
        total_points,
        duration_ms=None,
        admin_user_id=None,
        event_metadata=None,
    ):
        """Record an evaluation run; added to the caller's transaction"""
        event_type = f"{resource_type.upper()}_EVALUATED"
        who = f"admin {admin_user_id}" if admin_user_id else "system"
        label = resource_type.replace("_", " ").capitalize()

        entry = EvaluationAudit(
            admin_user_id=admin_user_id,
            league_id=league_id,
            event_type=event_type,
            resource_type=resource_type,
            resource_id=resource_id,
            description=f"{label} {resource_id} evaluated by {who}",
            affected_users=affected_users,
            total_points=total_points,
            duration_ms=duration_ms,
            event_metadata=event_metadata or {},
        )

        db.session.add(entry)
        return entry

    @staticmethod
    def get_for_resource(resource_type, resource_id):
        return (
            EvaluationAudit.query.filter_by(
                resource_type=resource_type, resource_id=resource_id
            )
            .order_by(EvaluationAudit.created_at.desc(), EvaluationAudit.id.desc())
            .all()
        )
