from flask import Flask, session

from blackboards.config import Config
from blackboards.extensions import db, login_manager, migrate
from blackboards.routes import register_routes
from blackboards.services.roles import Member


def create_app(test_config=None):
    app = Flask(
        __name__,
        template_folder="../templates",
        static_folder="../static",
    )
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_member(member_id):
        name = session.get("member_name")
        if name is None:
            return None
        return Member.load(int(member_id), name)

    register_routes(app)
    return app


__all__ = ["db", "migrate", "create_app"]
