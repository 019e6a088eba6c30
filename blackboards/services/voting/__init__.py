from blackboards.services.voting.ballots import build_ballots, group_ballots
from blackboards.services.voting.errors import (
    BallotValidationError,
    ElectionError,
    PositionNotFoundError,
    TallyError,
    TieBreakBallotMissingError,
    VotingClosedError,
)
from blackboards.services.voting.meek import tally
from blackboards.services.voting.results import (
    RankedCandidate,
    TallyResult,
    compute_all_results,
    compute_results,
)
from blackboards.services.voting.submission import submit_ballot
from blackboards.services.voting.ties import resolve_ties

__all__ = [
    "BallotValidationError",
    "ElectionError",
    "PositionNotFoundError",
    "RankedCandidate",
    "TallyError",
    "TallyResult",
    "TieBreakBallotMissingError",
    "VotingClosedError",
    "build_ballots",
    "compute_all_results",
    "compute_results",
    "group_ballots",
    "resolve_ties",
    "submit_ballot",
    "tally",
]
