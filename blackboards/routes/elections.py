from flask import (
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user

from blackboards.services.roles import Role, role_required
from blackboards.services.voting import (
    BallotValidationError,
    PositionNotFoundError,
    compute_results,
    submit_ballot,
)
from blackboards.services.voting import store


def _rankings_from_form(form, slate_size):
    rankings = []
    for rank in range(1, slate_size + 1):
        value = form.get(f"rank_{rank}")
        if value:
            rankings.append((rank, value))
    return rankings


def register_election_routes(app):
    @app.route("/elections")
    @role_required(Role.MEMBER)
    def elections_dashboard():
        positions = []
        for position in store.get_positions():
            positions.append(
                {
                    "position": position,
                    "slate": store.get_slate(position.id),
                    "current_ballot": store.get_current_ballot(
                        current_user.id, position.id
                    ),
                }
            )

        return render_template(
            "elections/positions.html",
            positions=positions,
            is_admin=current_user.has_role(Role.ELECTION_ADMIN),
        )

    @app.route("/elections/vote/<int:position_id>", methods=["GET", "POST"])
    @role_required(Role.MEMBER)
    def vote(position_id):
        position = store.get_position(position_id)
        if position is None:
            abort(404)

        slate = store.get_slate(position_id)

        if request.method == "POST":
            try:
                submit_ballot(
                    current_user.id,
                    position_id,
                    _rankings_from_form(request.form, len(slate)),
                )
            except PositionNotFoundError:
                abort(404)
            except BallotValidationError as exc:
                flash(str(exc), "error")
                return redirect(url_for("vote", position_id=position_id))

            flash(f"Your ballot for {position.title} has been recorded.", "success")
            return redirect(url_for("elections_dashboard"))

        return render_template(
            "elections/vote.html",
            position=position,
            slate=slate,
            current_ballot=store.get_current_ballot(current_user.id, position_id),
        )

    @app.route("/elections/results")
    @role_required(Role.ELECTION_ADMIN)
    def election_results():
        results = compute_results(current_app.config["TIE_BREAK_VOTER_ID"])
        return render_template("elections/results.html", results=results)

    @app.route("/elections/positions/<int:position_id>/toggle", methods=["POST"])
    @role_required(Role.ELECTION_ADMIN)
    def toggle_position(position_id):
        position = store.toggle_position(position_id)
        if position is None:
            abort(404)

        state = "opened" if position.open else "closed"
        flash(f"Voting for {position.title} has been {state}.", "success")
        return redirect(url_for("elections_dashboard"))
