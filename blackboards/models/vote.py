from blackboards.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint(
            "voter_id", "position_id", "rank", name="uq_votes_voter_position_rank"
        ),
    )

    voter_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    position_id = db.Column(
        db.Integer, db.ForeignKey("exec_positions.id"), primary_key=True
    )
    candidate_id = db.Column(
        db.Integer, db.ForeignKey("candidates.warwick_id"), primary_key=True
    )
    rank = db.Column(db.Integer, nullable=False)
