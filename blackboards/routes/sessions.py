import smtplib
from datetime import datetime

from flask import abort, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from blackboards.extensions import db
from blackboards.models import TrainingSession
from blackboards.services import sessions as booking
from blackboards.services.mail import send_confirmation
from blackboards.services.roles import Role, role_required


def _sessions_context(current=None):
    window = booking.session_window()
    return {
        "sessions": booking.visible_sessions(window),
        "current": current,
        "registrations": booking.registrations_by_session(window),
        "bookings": booking.bookings_for(current_user.id, window),
    }


def register_session_routes(app):
    @app.route("/")
    @app.route("/sessions")
    @login_required
    def sessions_dashboard():
        return render_template("sessions.html", **_sessions_context())

    @app.route("/sessions/<int:session_id>")
    @login_required
    def specific_session(session_id):
        current = db.get_or_404(TrainingSession, session_id)
        return render_template("sessions.html", **_sessions_context(current))

    @app.route("/sessions/register", methods=["POST"])
    @login_required
    def register_for_session():
        session_id = request.form.get("session_id", type=int)
        if session_id is None:
            flash("Please pick a session to book.", "error")
            return redirect(url_for("sessions_dashboard"))

        try:
            training_session = booking.register(
                session_id, current_user.id, current_user.name
            )
        except booking.SessionNotFoundError:
            abort(404)
        except booking.BookingError as exc:
            flash(str(exc), "error")
            return redirect(url_for("sessions_dashboard"))

        try:
            send_confirmation(
                current_user.name,
                current_user.id,
                training_session.title,
                training_session.start_time,
            )
        except (smtplib.SMTPException, OSError, RuntimeError):
            current_app.logger.exception(
                "Failed to send a confirmation to warwick_id=%s", current_user.id
            )

        flash("Successfully registered for the session!", "success")
        return redirect(url_for("sessions_dashboard"))

    @app.route("/sessions/cancel", methods=["POST"])
    @login_required
    def cancel_session():
        session_id = request.form.get("session_id", type=int)
        if session_id is not None and booking.cancel(session_id, current_user.id):
            flash("Your booking has been cancelled.", "success")
        else:
            flash("You had no booking for that session.", "error")
        return redirect(url_for("sessions_dashboard"))

    @app.route("/sessions/create", methods=["POST"])
    @role_required(Role.SESSION_ADMIN)
    def create_session():
        title = (request.form.get("title") or "").strip()
        spaces = request.form.get("spaces", type=int)
        try:
            start_time = datetime.strptime(
                f"{request.form.get('date')} {request.form.get('start_time')}",
                "%Y-%m-%d %H:%M",
            )
        except ValueError:
            start_time = None

        if not title or spaces is None or start_time is None:
            flash("A session needs a title, a number of spaces and a start time.", "error")
            return redirect(url_for("sessions_dashboard"))

        try:
            booking.create_session(title, start_time, spaces)
        except ValueError as exc:
            flash(str(exc), "error")
            return redirect(url_for("sessions_dashboard"))

        flash(f"Created {title}.", "success")
        return redirect(url_for("sessions_dashboard"))

    @app.route("/sessions/<int:session_id>/delete", methods=["POST"])
    @role_required(Role.SESSION_ADMIN)
    def delete_session(session_id):
        try:
            booking.delete_session(session_id)
        except booking.SessionNotFoundError:
            abort(404)

        flash("Session deleted.", "success")
        return redirect(url_for("sessions_dashboard"))

    @app.route("/attendance")
    @role_required(Role.SESSION_ADMIN)
    def attendance():
        window = booking.session_window()
        return render_template(
            "attendance.html", sessions=booking.visible_sessions(window), current=None
        )

    @app.route("/attendance/<int:session_id>")
    @role_required(Role.SESSION_ADMIN)
    def session_attendance(session_id):
        current = db.get_or_404(TrainingSession, session_id)
        window = booking.session_window()
        return render_template(
            "attendance.html", sessions=booking.visible_sessions(window), current=current
        )

    @app.route("/attendance/record", methods=["POST"])
    @role_required(Role.SESSION_ADMIN)
    def record_attendance():
        session_id = request.form.get("session_id", type=int)
        if session_id is None:
            abort(400)

        try:
            warwick_id = booking.parse_warwick_id(request.form.get("warwick_id"))
            booking.record_attendance(session_id, warwick_id)
        except booking.SessionNotFoundError:
            abort(404)
        except (ValueError, booking.AlreadyRecordedError) as exc:
            flash(str(exc), "error")
            return redirect(url_for("session_attendance", session_id=session_id))

        flash(f"Recorded attendance for ID: {warwick_id}", "success")
        return redirect(url_for("session_attendance", session_id=session_id))
