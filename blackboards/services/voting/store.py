from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from blackboards.extensions import db
from blackboards.models import Candidate, ExecPosition, Nomination, Vote


def get_votes(position_id=None):
    query = Vote.query
    if position_id is not None:
        query = query.filter_by(position_id=position_id)
    return query.order_by(Vote.position_id, Vote.voter_id, Vote.rank).all()


def get_current_ballot(voter_id, position_id):
    """Names of the candidates on a voter's ballot, best first, or ``None``."""
    rows = (
        db.session.query(Candidate.name)
        .join(Vote, Vote.candidate_id == Candidate.warwick_id)
        .filter(Vote.voter_id == voter_id, Vote.position_id == position_id)
        .order_by(Vote.rank)
        .all()
    )
    if not rows:
        return None
    return [row.name for row in rows]


def replace_ballot(voter_id, position_id, rankings):
    """Swap a voter's ballot for ``rankings`` (rank -> candidate id) atomically."""
    try:
        Vote.query.filter_by(voter_id=voter_id, position_id=position_id).delete(
            synchronize_session="fetch"
        )
        db.session.add_all(
            [
                Vote(
                    voter_id=voter_id,
                    position_id=position_id,
                    candidate_id=candidate_id,
                    rank=rank,
                )
                for rank, candidate_id in sorted(rankings.items())
            ]
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Replaced ballot for voter_id=%s position_id=%s: %s",
        voter_id,
        position_id,
        dict(sorted(rankings.items())),
    )


def get_positions():
    return ExecPosition.query.order_by(ExecPosition.id).all()


def get_position(position_id, for_update=False):
    query = ExecPosition.query.filter_by(id=position_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def get_closed_position_ids():
    return [
        position.id
        for position in ExecPosition.query.filter(ExecPosition.open.is_(False))
        .order_by(ExecPosition.id)
        .all()
    ]


def toggle_position(position_id):
    position = get_position(position_id, for_update=True)
    if position is None:
        return None

    position.open = not position.open
    db.session.commit()

    current_app.logger.info(
        "Toggled position_id=%s, voting is now %s",
        position_id,
        "open" if position.open else "closed",
    )
    return position


def get_candidates():
    return Candidate.query.order_by(Candidate.warwick_id).all()


def get_slate(position_id):
    """Nominees for a position who have not already been elected elsewhere."""
    return (
        Candidate.query.join(Nomination, Nomination.warwick_id == Candidate.warwick_id)
        .filter(Nomination.position_id == position_id, Candidate.elected.is_(False))
        .order_by(Candidate.name, Candidate.warwick_id)
        .all()
    )


def is_nominee(warwick_id, position_id):
    return (
        Nomination.query.filter_by(warwick_id=warwick_id, position_id=position_id).first()
        is not None
    )


def set_elected(candidate_ids):
    candidate_ids = sorted(set(candidate_ids))

    try:
        Candidate.query.update({Candidate.elected: False}, synchronize_session=False)
        if candidate_ids:
            Candidate.query.filter(Candidate.warwick_id.in_(candidate_ids)).update(
                {Candidate.elected: True}, synchronize_session=False
            )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info("Marked candidates as elected: %s", candidate_ids)
