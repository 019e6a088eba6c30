from blackboards.routes.auth import register_auth_routes
from blackboards.routes.elections import register_election_routes
from blackboards.routes.personal_bests import register_personal_best_routes
from blackboards.routes.sessions import register_session_routes


def register_routes(app):
    register_auth_routes(app)
    register_session_routes(app)
    register_personal_best_routes(app)
    register_election_routes(app)
