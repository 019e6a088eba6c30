from blackboards.extensions import db


class Candidate(db.Model):
    __tablename__ = "candidates"

    warwick_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(200), nullable=False)
    elected = db.Column(db.Boolean, nullable=False, default=False)

    nominations = db.relationship("Nomination", backref="candidate", lazy=True)
