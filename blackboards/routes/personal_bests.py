from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from blackboards.services.personal_bests import (
    find_or_create_personal_best,
    parse_lifts,
    powerlifting_board,
    update_personal_best,
    visibility_warning,
    weightlifting_board,
)


def register_personal_best_routes(app):
    @app.route("/personal-bests", methods=["GET", "POST"])
    @login_required
    def personal_bests():
        if request.method == "POST":
            try:
                lifts = parse_lifts(request.form)
            except ValueError as exc:
                flash(str(exc), "error")
                return redirect(url_for("personal_bests"))

            personal_best = update_personal_best(
                current_user.id,
                current_user.name,
                lifts,
                show_pl=bool(request.form.get("show_pl")),
                show_wl=bool(request.form.get("show_wl")),
            )

            warning = visibility_warning(personal_best)
            if warning:
                flash(warning, "warning")
            else:
                flash("Your personal bests have been updated.", "success")
            return redirect(url_for("personal_bests"))

        personal_best = find_or_create_personal_best(current_user.id, current_user.name)
        return render_template("personal_bests.html", personal_best=personal_best)

    @app.route("/leaderboards")
    @login_required
    def leaderboards():
        return render_template(
            "leaderboards.html",
            powerlifting=powerlifting_board(),
            weightlifting=weightlifting_board(),
        )
