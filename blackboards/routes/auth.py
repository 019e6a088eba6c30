from flask import redirect, url_for

from blackboards.services.auth import sign_out


def register_auth_routes(app):
    @app.route("/logout")
    def logout():
        sign_out()
        return redirect(url_for("sessions_dashboard"))
