from flask import current_app

from blackboards.extensions import db
from blackboards.models import PersonalBest

LIFTS = ("squat", "bench", "deadlift", "snatch", "clean_and_jerk")


def find_or_create_personal_best(warwick_id, name):
    personal_best = db.session.get(PersonalBest, warwick_id)
    if personal_best is not None:
        return personal_best

    current_app.logger.info(
        "User (%s, %s) has no personal bests, inserting defaults", warwick_id, name
    )
    personal_best = PersonalBest(
        warwick_id=warwick_id, name=name, show_pl=False, show_wl=False
    )
    db.session.add(personal_best)
    db.session.commit()
    return personal_best


def parse_lifts(form):
    """Read optional lift weights from a form, ``None`` for blank fields."""
    lifts = {}
    for lift in LIFTS:
        raw = (form.get(lift) or "").strip()
        if not raw:
            lifts[lift] = None
            continue

        label = lift.replace("_", " ").title()
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(f"{label} must be a number.") from None
        if value < 0:
            raise ValueError(f"{label} cannot be negative.")
        lifts[lift] = value

    return lifts


def update_personal_best(warwick_id, name, lifts, show_pl, show_wl):
    personal_best = find_or_create_personal_best(warwick_id, name)

    current_app.logger.info(
        "Updating personal bests for (%s, %s) to: %s", warwick_id, name, lifts
    )

    for lift in LIFTS:
        value = lifts.get(lift)
        if value is not None:
            setattr(personal_best, lift, value)

    personal_best.name = name
    personal_best.show_pl = show_pl
    personal_best.show_wl = show_wl
    db.session.commit()
    return personal_best


def visibility_warning(personal_best):
    if personal_best.show_pl and not personal_best.has_pl_lifts:
        return (
            "You have checked to be shown for powerlifting but have no personal "
            "bests, so you have been hidden from this board"
        )

    if personal_best.show_wl and not personal_best.has_wl_lifts:
        return (
            "You have checked to be shown for weightlifting but have no personal "
            "bests, so you have been hidden from this board"
        )

    return None


def powerlifting_board():
    return (
        PersonalBest.query.filter(
            PersonalBest.show_pl.is_(True),
            db.or_(
                PersonalBest.squat.isnot(None),
                PersonalBest.bench.isnot(None),
                PersonalBest.deadlift.isnot(None),
            ),
        )
        .order_by(PersonalBest.warwick_id)
        .all()
    )


def weightlifting_board():
    return (
        PersonalBest.query.filter(
            PersonalBest.show_wl.is_(True),
            db.or_(
                PersonalBest.snatch.isnot(None),
                PersonalBest.clean_and_jerk.isnot(None),
            ),
        )
        .order_by(PersonalBest.warwick_id)
        .all()
    )
