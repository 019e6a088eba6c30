from blackboards.extensions import db


class ExecPosition(db.Model):
    __tablename__ = "exec_positions"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    num_winners = db.Column(db.Integer, nullable=False, default=1)
    open = db.Column(db.Boolean, nullable=False, default=True)

    nominations = db.relationship("Nomination", backref="position", lazy=True)
    votes = db.relationship("Vote", backref="position", lazy=True)
