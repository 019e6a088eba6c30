import smtplib
from email.message import EmailMessage

from flask import current_app


def warwick_email(warwick_id):
    return f"u{warwick_id}@live.warwick.ac.uk"


def format_start_time(start_time):
    # Mon 08 Oct, 12:15
    return start_time.strftime("%a %d %b, %H:%M")


def send_confirmation(name, warwick_id, session_title, start_time):
    if not current_app.config["SEND_EMAILS"]:
        return False

    if not current_app.config["MAIL_USERNAME"] or not current_app.config["MAIL_PASSWORD"]:
        raise RuntimeError("Email credentials are not configured.")

    msg = EmailMessage()
    msg["Subject"] = "Warwick Barbell Session Confirmation"
    msg["From"] = current_app.config["MAIL_DEFAULT_SENDER"]
    msg["To"] = f"{name} <{warwick_email(warwick_id)}>"
    msg.set_content(
        f"Hey {name},\n\n"
        f"Your booking for {session_title} at {format_start_time(start_time)} "
        "has been confirmed, see you there!"
    )

    with smtplib.SMTP(
        current_app.config["MAIL_SERVER"], current_app.config["MAIL_PORT"]
    ) as server:
        if current_app.config["MAIL_USE_TLS"]:
            server.starttls()
        server.login(
            current_app.config["MAIL_USERNAME"], current_app.config["MAIL_PASSWORD"]
        )
        server.send_message(msg)
        current_app.logger.info("Booking confirmation sent to %s", warwick_id)

    return True
