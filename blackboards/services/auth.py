from flask import current_app, session
from flask_login import login_user, logout_user

from blackboards.services.roles import Member


def sign_in(warwick_id, name):
    """Start a cookie session for a member the SSO provider has vouched for."""
    member = Member.load(warwick_id, name)
    session["member_name"] = name
    login_user(member)
    current_app.logger.info("Signed in warwick_id=%s", warwick_id)
    return member


def sign_out():
    logout_user()
    session.pop("member_name", None)
