from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app

from blackboards.services.voting import store
from blackboards.services.voting.ballots import ballot_for_voter, build_ballots
from blackboards.services.voting.errors import ElectionError, TieBreakBallotMissingError
from blackboards.services.voting.meek import cutoff_rank, tally
from blackboards.services.voting.ties import resolve_ties

RankedCandidate = namedtuple("RankedCandidate", ["candidate_id", "name", "rank"])


@dataclass
class TallyResult:
    position_id: int
    title: str
    num_winners: int
    open: bool
    winners: List[RankedCandidate] = field(default_factory=list)
    voter_count: int = 0
    error: Optional[str] = None


def _winners_for_position(position, votes, names, tie_break_voter_id):
    ranked = tally(build_ballots(votes), position.num_winners)
    cut = cutoff_rank(ranked, position.num_winners)

    winners = [
        RankedCandidate(cid, names.get(cid, str(cid)), rank)
        for cid, rank in ranked
        if cut is None or rank <= cut
    ]
    if len(winners) <= position.num_winners:
        return winners

    tie_break_ballot = ballot_for_voter(votes, tie_break_voter_id)
    if tie_break_ballot is None:
        raise TieBreakBallotMissingError(
            f"{position.title} has a tie but the tie-break voter has not voted for it."
        )

    return resolve_ties(winners, position.num_winners, tie_break_ballot)


def compute_all_results(positions, votes, candidates, tie_break_voter_id):
    """Tally every position from one snapshot of votes.

    A failure for one position is logged and recorded on its result without
    affecting the others.
    """
    names = {candidate.warwick_id: candidate.name for candidate in candidates}

    votes_by_position = {}
    for vote in votes:
        votes_by_position.setdefault(vote.position_id, []).append(vote)

    results = []
    for position in positions:
        position_votes = votes_by_position.get(position.id, [])
        result = TallyResult(
            position_id=position.id,
            title=position.title,
            num_winners=position.num_winners,
            open=position.open,
            voter_count=len({vote.voter_id for vote in position_votes}),
        )

        try:
            result.winners = _winners_for_position(
                position, position_votes, names, tie_break_voter_id
            )
        except (ElectionError, ValueError) as exc:
            current_app.logger.exception(
                "Failed to compute results for position_id=%s", position.id
            )
            result.error = str(exc)

        results.append(result)

    return results


def elected_candidate_ids(results):
    return sorted(
        {
            winner.candidate_id
            for result in results
            if not result.open and result.error is None
            for winner in result.winners
        }
    )


def compute_results(tie_break_voter_id):
    """Compute results for every position and mark the winners of closed ones."""
    results = compute_all_results(
        store.get_positions(),
        store.get_votes(),
        store.get_candidates(),
        tie_break_voter_id,
    )
    store.set_elected(elected_candidate_ids(results))
    return results
