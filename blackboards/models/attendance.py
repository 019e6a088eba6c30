from blackboards.extensions import db


class Attendance(db.Model):
    __tablename__ = "attendances"

    session_id = db.Column(db.Integer, db.ForeignKey("sessions.id"), primary_key=True)
    warwick_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
