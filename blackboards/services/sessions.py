from datetime import datetime, time, timedelta

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blackboards.extensions import db
from blackboards.models import Attendance, Registration, TrainingSession


class BookingError(Exception):
    pass


class SessionNotFoundError(BookingError):
    pass


class SessionFullError(BookingError):
    pass


class AlreadyRegisteredError(BookingError):
    pass


class AlreadyRecordedError(BookingError):
    pass


def session_window(now=None):
    """The week of sessions to show, from one Sunday 18:00 to the next.

    It starts on the first Sunday on or after the date one week before
    ``now``. When ``now`` is omitted the current time plus six hours is used,
    so sessions flip over to the next week six hours before the Sunday
    evening boundary.
    """
    if now is None:
        now = datetime.now() + timedelta(hours=6)

    one_week_prior = now - timedelta(weeks=1)
    days_until_sunday = (6 - one_week_prior.weekday()) % 7
    sunday = (one_week_prior + timedelta(days=days_until_sunday)).date()

    start = datetime.combine(sunday, time(18, 0))
    return start, start + timedelta(weeks=1)


def _in_window(query, window):
    start, end = window
    return query.filter(
        TrainingSession.start_time > start, TrainingSession.start_time < end
    )


def visible_sessions(window):
    return (
        _in_window(TrainingSession.query, window)
        .order_by(TrainingSession.start_time, TrainingSession.title)
        .all()
    )


def registrations_by_session(window):
    rows = (
        _in_window(
            db.session.query(TrainingSession, Registration.name).join(
                Registration, Registration.session_id == TrainingSession.id
            ),
            window,
        )
        .order_by(TrainingSession.start_time, TrainingSession.title, Registration.name)
        .all()
    )

    grouped = {}
    for training_session, name in rows:
        grouped.setdefault(training_session, []).append(name)

    return list(grouped.items())


def bookings_for(warwick_id, window):
    return (
        _in_window(
            TrainingSession.query.join(
                Registration, Registration.session_id == TrainingSession.id
            ),
            window,
        )
        .filter(Registration.warwick_id == warwick_id)
        .order_by(TrainingSession.start_time, TrainingSession.title)
        .all()
    )


def create_session(title, start_time, spaces):
    if spaces < 0:
        raise ValueError("A session cannot have a negative number of spaces.")

    training_session = TrainingSession(title=title, start_time=start_time, spaces=spaces)
    db.session.add(training_session)
    db.session.commit()

    current_app.logger.info(
        "Created session id=%s title=%r start_time=%s spaces=%s",
        training_session.id,
        title,
        start_time,
        spaces,
    )
    return training_session


def delete_session(session_id):
    training_session = db.session.get(TrainingSession, session_id)
    if training_session is None:
        raise SessionNotFoundError(f"No session with id {session_id} exists.")

    current_app.logger.warning(
        "Deleting session id=%s, including registrations", session_id
    )
    db.session.delete(training_session)
    db.session.commit()


def register(session_id, warwick_id, name):
    training_session = (
        TrainingSession.query.filter_by(id=session_id).with_for_update().first()
    )
    if training_session is None:
        db.session.rollback()
        raise SessionNotFoundError(f"No session with id {session_id} exists.")

    if training_session.remaining == 0:
        db.session.rollback()
        raise SessionFullError(f"{training_session.title} has no spaces left.")

    if db.session.get(Registration, (session_id, warwick_id)) is not None:
        db.session.rollback()
        raise AlreadyRegisteredError("You have already booked this session.")

    try:
        db.session.add(
            Registration(session_id=session_id, warwick_id=warwick_id, name=name)
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyRegisteredError("You have already booked this session.") from None

    current_app.logger.info(
        "Registered warwick_id=%s for session_id=%s", warwick_id, session_id
    )
    return training_session


def cancel(session_id, warwick_id):
    try:
        deleted = Registration.query.filter_by(
            session_id=session_id, warwick_id=warwick_id
        ).delete(synchronize_session="fetch")
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Cancelled registration for warwick_id=%s on session_id=%s",
        warwick_id,
        session_id,
    )
    return deleted > 0


def parse_warwick_id(value):
    value = (value or "").strip()
    if not (value.isdigit() and len(value) == 7):
        raise ValueError("Value was either not numeric or incorrect length")
    return int(value)


def record_attendance(session_id, warwick_id):
    if db.session.get(TrainingSession, session_id) is None:
        raise SessionNotFoundError(f"No session with id {session_id} exists.")

    message = f"Attendance for {warwick_id} has already been recorded for this session"
    if db.session.get(Attendance, (session_id, warwick_id)) is not None:
        raise AlreadyRecordedError(message)

    try:
        db.session.add(Attendance(session_id=session_id, warwick_id=warwick_id))
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyRecordedError(message) from None

    current_app.logger.info(
        "Recorded attendance for warwick_id=%s at session_id=%s",
        warwick_id,
        session_id,
    )
