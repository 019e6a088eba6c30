from blackboards.extensions import db


class Nomination(db.Model):
    __tablename__ = "nominations"

    position_id = db.Column(
        db.Integer, db.ForeignKey("exec_positions.id"), primary_key=True
    )
    warwick_id = db.Column(
        db.Integer, db.ForeignKey("candidates.warwick_id"), primary_key=True
    )
