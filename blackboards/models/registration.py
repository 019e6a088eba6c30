from blackboards.extensions import db


class Registration(db.Model):
    __tablename__ = "registrations"

    session_id = db.Column(db.Integer, db.ForeignKey("sessions.id"), primary_key=True)
    warwick_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(200), nullable=False)
