from blackboards.extensions import db
from blackboards.services.voting import store
from blackboards.services.voting.errors import (
    BallotValidationError,
    PositionNotFoundError,
    VotingClosedError,
)


def _normalise_rankings(rankings):
    pairs = rankings.items() if hasattr(rankings, "items") else rankings

    normalised = {}
    for rank, candidate_id in pairs:
        try:
            rank = int(rank)
            candidate_id = int(candidate_id)
        except (TypeError, ValueError):
            raise BallotValidationError("Rankings must be whole numbers.") from None

        if rank < 1:
            raise BallotValidationError("Rankings must start from 1.")
        if rank in normalised:
            raise BallotValidationError(f"Rank {rank} was used more than once.")

        normalised[rank] = candidate_id

    if sorted(normalised) != list(range(1, len(normalised) + 1)):
        raise BallotValidationError("Rankings must run from 1 to N without gaps.")

    return normalised


def submit_ballot(voter_id, position_id, rankings):
    """Validate and store a voter's ballot, replacing any previous one.

    ``rankings`` maps rank to candidate id, or is an iterable of
    ``(rank, candidate_id)`` pairs. Nothing is stored unless every check
    passes.
    """
    position = store.get_position(position_id, for_update=True)
    if position is None:
        db.session.rollback()
        raise PositionNotFoundError(f"No position with id {position_id} exists.")

    try:
        if not position.open:
            raise VotingClosedError(f"Voting for {position.title} is closed.")

        if store.is_nominee(voter_id, position_id):
            raise BallotValidationError(
                f"You are standing for {position.title}, so you cannot vote for it."
            )

        ballot = _normalise_rankings(rankings)

        candidate_ids = list(ballot.values())
        if len(set(candidate_ids)) != len(candidate_ids):
            raise BallotValidationError("Each candidate can only be ranked once.")

        slate_ids = {candidate.warwick_id for candidate in store.get_slate(position_id)}
        if len(ballot) != len(slate_ids):
            raise BallotValidationError(
                f"Please rank all {len(slate_ids)} candidates for {position.title}."
            )

        unknown = set(candidate_ids) - slate_ids
        if unknown:
            raise BallotValidationError(
                f"Some ranked candidates are not standing for {position.title}."
            )
    except BallotValidationError:
        db.session.rollback()
        raise

    store.replace_ballot(voter_id, position_id, ballot)
