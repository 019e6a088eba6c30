from blackboards.extensions import db


class TrainingSession(db.Model):
    __tablename__ = "sessions"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    start_time = db.Column(db.DateTime, nullable=False)
    spaces = db.Column(db.Integer, nullable=False)

    registrations = db.relationship(
        "Registration", backref="session", lazy=True, cascade="all, delete-orphan"
    )
    attendances = db.relationship(
        "Attendance", backref="session", lazy=True, cascade="all, delete-orphan"
    )

    @property
    def remaining(self):
        return max(self.spaces - len(self.registrations), 0)
