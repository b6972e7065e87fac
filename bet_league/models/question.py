from datetime import datetime, timezone

from bet_league import db


class LeagueQuestion(db.Model):
    """Yes/no question asked in a league"""

    __tablename__ = "league_questions"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    text = db.Column(db.String(500), nullable=False)
    date_time = db.Column(db.DateTime, nullable=False)
    result = db.Column(db.Boolean)  # None until answered

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
        "UserQuestionBet", backref="question", lazy="dynamic", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<LeagueQuestion {self.text[:30]!r}>"

    def set_result(self, result):
        self.result = result
        self.is_evaluated = False


class UserQuestionBet(db.Model):
    __tablename__ = "user_question_bets"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(
        db.Integer, db.ForeignKey("league_questions.id"), nullable=False
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    user_bet = db.Column(db.Boolean)  # None = no pick

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
        db.UniqueConstraint("question_id", "user_id", name="unique_user_question_bet"),
    )

    def __repr__(self):
        return f"<UserQuestionBet user_id={self.user_id} answer={self.user_bet}>"
