from blackboards.extensions import db


class PersonalBest(db.Model):
    __tablename__ = "personal_bests"

    warwick_id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(200), nullable=False)
    squat = db.Column(db.Float, nullable=True)
    bench = db.Column(db.Float, nullable=True)
    deadlift = db.Column(db.Float, nullable=True)
    snatch = db.Column(db.Float, nullable=True)
    clean_and_jerk = db.Column(db.Float, nullable=True)
    show_pl = db.Column(db.Boolean, nullable=False, default=False)
    show_wl = db.Column(db.Boolean, nullable=False, default=False)

    @property
    def has_pl_lifts(self):
        return any(
            lift is not None for lift in (self.squat, self.bench, self.deadlift)
        )

    @property
    def has_wl_lifts(self):
        return any(lift is not None for lift in (self.snatch, self.clean_and_jerk))
