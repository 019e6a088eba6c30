from datetime import datetime, timedelta

from blackboards.extensions import db
from blackboards.models import Attendance, Registration
from blackboards.services import sessions as booking


def _this_weeks_session(spaces=5):
    start, _ = booking.session_window()
    return booking.create_session("Powerlifting", start + timedelta(days=2), spaces)


def test_dashboard_lists_this_weeks_sessions(member_client, db_session):
    _this_weeks_session()

    response = member_client.get("/sessions")

    assert response.status_code == 200
    assert b"Powerlifting" in response.data


def test_member_books_and_cancels(member_client, db_session):
    training_session = _this_weeks_session()
    session_id = training_session.id

    response = member_client.post("/sessions/register", data={"session_id": session_id})
    assert response.status_code == 302
    assert Registration.query.count() == 1

    response = member_client.post(
        "/sessions/register", data={"session_id": session_id}, follow_redirects=True
    )
    assert b"You have already booked this session." in response.data

    member_client.post("/sessions/cancel", data={"session_id": session_id})
    assert Registration.query.count() == 0


def test_booking_a_missing_session(member_client, db_session):
    assert member_client.post("/sessions/register", data={"session_id": 404}).status_code == 404


def test_only_session_admins_manage_sessions(member_client, db_session):
    form = {"title": "Olympic", "date": "2030-01-01", "start_time": "18:00", "spaces": "10"}

    assert member_client.post("/sessions/create", data=form).status_code == 403
    assert member_client.get("/attendance").status_code == 403


def test_admin_creates_a_session(admin_client, db_session):
    form = {"title": "Olympic", "date": "2030-01-01", "start_time": "18:00", "spaces": "10"}

    response = admin_client.post("/sessions/create", data=form)

    assert response.status_code == 302
    db.session.expire_all()
    created = booking.visible_sessions(
        (datetime(2029, 12, 31), datetime(2030, 1, 2))
    )
    assert [s.title for s in created] == ["Olympic"]


def test_admin_records_attendance(admin_client, db_session):
    session_id = _this_weeks_session().id

    response = admin_client.post(
        "/attendance/record",
        data={"session_id": session_id, "warwick_id": "1702502"},
        follow_redirects=True,
    )
    assert b"Recorded attendance for ID: 1702502" in response.data

    response = admin_client.post(
        "/attendance/record",
        data={"session_id": session_id, "warwick_id": "17025"},
        follow_redirects=True,
    )
    assert b"not numeric or incorrect length" in response.data
    assert Attendance.query.count() == 1
