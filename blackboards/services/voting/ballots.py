from itertools import groupby
from operator import attrgetter


def group_ballots(votes):
    """Group raw vote rows into one ranked ballot per voter.

    Returns ``(voter_id, [candidate_id, ...])`` pairs in ascending voter id
    order, each ballot ordered from most to least preferred. Any object with
    ``voter_id``, ``candidate_id`` and ``rank`` attributes works as a vote.
    """
    ordered = sorted(votes, key=attrgetter("voter_id", "rank"))

    ballots = []
    for voter_id, voter_votes in groupby(ordered, key=attrgetter("voter_id")):
        ballots.append((voter_id, [vote.candidate_id for vote in voter_votes]))

    return ballots


def build_ballots(votes):
    return [ballot for _, ballot in group_ballots(votes)]


def ballot_for_voter(votes, voter_id):
    for ballot_voter_id, ballot in group_ballots(votes):
        if ballot_voter_id == voter_id:
            return ballot
    return None
