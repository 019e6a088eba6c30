from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from blackboards import create_app
from blackboards.extensions import db
from blackboards.models import Candidate, ExecPosition, Nomination

MEMBER_ID = 1700001
ADMIN_ID = 1700002
TIE_BREAK_ID = 1700003


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "BARBELL_MEMBERS": f"{MEMBER_ID},{ADMIN_ID},{TIE_BREAK_ID}",
            "ELECTION_ADMINS": str(ADMIN_ID),
            "SESSION_ADMINS": str(ADMIN_ID),
            "TIE_BREAK_VOTER_ID": TIE_BREAK_ID,
            "SEND_EMAILS": False,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


def _signed_in_client(client, warwick_id, name):
    with client.session_transaction() as session:
        session["_user_id"] = str(warwick_id)
        session["_fresh"] = True
        session["member_name"] = name
    return client


@pytest.fixture()
def member_client(client):
    return _signed_in_client(client, MEMBER_ID, "Member One")


@pytest.fixture()
def admin_client(client):
    return _signed_in_client(client, ADMIN_ID, "Admin Two")


@pytest.fixture()
def election(db_session):
    """Two open positions with three nominees each, one shared."""
    president = ExecPosition(id=1, title="President", num_winners=1, open=True)
    committee = ExecPosition(id=2, title="Committee", num_winners=2, open=True)
    db_session.add_all([president, committee])

    candidates = [
        Candidate(warwick_id=101, name="Alice", elected=False),
        Candidate(warwick_id=102, name="Bob", elected=False),
        Candidate(warwick_id=103, name="Carol", elected=False),
        Candidate(warwick_id=104, name="Dan", elected=False),
    ]
    db_session.add_all(candidates)
    db_session.flush()

    db_session.add_all(
        [
            Nomination(position_id=1, warwick_id=101),
            Nomination(position_id=1, warwick_id=102),
            Nomination(position_id=1, warwick_id=103),
            Nomination(position_id=2, warwick_id=102),
            Nomination(position_id=2, warwick_id=103),
            Nomination(position_id=2, warwick_id=104),
        ]
    )
    db_session.commit()
    return {"president": president, "committee": committee}
