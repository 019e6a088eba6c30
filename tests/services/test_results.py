from collections import namedtuple

import pytest
from sqlalchemy.exc import SQLAlchemyError

from blackboards.extensions import db
from blackboards.models import Candidate, ExecPosition, Vote
from blackboards.services.voting import compute_all_results, compute_results
from blackboards.services.voting.results import elected_candidate_ids
from blackboards.services.voting.store import set_elected


VoteRow = namedtuple("VoteRow", ["voter_id", "position_id", "candidate_id", "rank"])
CandidateRow = namedtuple("CandidateRow", ["warwick_id", "name"])

TIE_BREAK_ID = 1700003

CANDIDATES = [
    CandidateRow(101, "Alice"),
    CandidateRow(102, "Bob"),
    CandidateRow(103, "Carol"),
]


def _ballot(voter_id, position_id, candidate_ids):
    return [
        VoteRow(voter_id, position_id, cid, rank)
        for rank, cid in enumerate(candidate_ids, start=1)
    ]


def test_position_without_votes_has_no_winners(app):
    position = ExecPosition(id=1, title="President", num_winners=1, open=False)

    (result,) = compute_all_results([position], [], CANDIDATES, TIE_BREAK_ID)

    assert result.winners == []
    assert result.voter_count == 0
    assert result.error is None


def test_clear_winner_is_named(app):
    position = ExecPosition(id=1, title="President", num_winners=1, open=False)
    votes = _ballot(1, 1, [101, 102]) + _ballot(2, 1, [101, 103]) + _ballot(3, 1, [102])

    (result,) = compute_all_results([position], votes, CANDIDATES, TIE_BREAK_ID)

    assert [(w.candidate_id, w.name) for w in result.winners] == [(101, "Alice")]
    assert result.voter_count == 3


def test_tie_is_broken_by_the_tie_break_voter(app):
    position = ExecPosition(id=1, title="President", num_winners=1, open=False)
    votes = _ballot(10, 1, [101, 102]) + _ballot(11, 1, [102, 101])
    votes += _ballot(12, 1, [102, 101]) + _ballot(TIE_BREAK_ID, 1, [101, 102])

    (result,) = compute_all_results([position], votes, CANDIDATES, TIE_BREAK_ID)

    assert result.error is None
    assert [w.candidate_id for w in result.winners] == [101]


def test_missing_tie_break_ballot_only_fails_that_position(app):
    tied = ExecPosition(id=1, title="President", num_winners=1, open=False)
    clear = ExecPosition(id=2, title="Treasurer", num_winners=1, open=False)
    votes = _ballot(10, 1, [101, 102]) + _ballot(11, 1, [102, 101])
    votes += _ballot(10, 2, [103]) + _ballot(11, 2, [103])

    tied_result, clear_result = compute_all_results(
        [tied, clear], votes, CANDIDATES, TIE_BREAK_ID
    )

    assert tied_result.winners == []
    assert "tie-break" in tied_result.error
    assert [w.candidate_id for w in clear_result.winners] == [103]
    assert clear_result.error is None
    assert elected_candidate_ids([tied_result, clear_result]) == [103]


def test_only_closed_positions_count_towards_elected(app):
    closed = ExecPosition(id=1, title="President", num_winners=1, open=False)
    still_open = ExecPosition(id=2, title="Treasurer", num_winners=1, open=True)
    votes = _ballot(10, 1, [101]) + _ballot(10, 2, [102])

    results = compute_all_results([closed, still_open], votes, CANDIDATES, None)

    assert [w.candidate_id for w in results[1].winners] == [102]
    assert elected_candidate_ids(results) == [101]


def _vote(db_session, voter_id, position_id, candidate_ids):
    db_session.add_all(
        [
            Vote(
                voter_id=voter_id,
                position_id=position_id,
                candidate_id=cid,
                rank=rank,
            )
            for rank, cid in enumerate(candidate_ids, start=1)
        ]
    )


def test_compute_results_marks_winners_of_closed_positions(db_session, election):
    _vote(db_session, 1, 1, [101, 102, 103])
    _vote(db_session, 2, 1, [101, 103, 102])
    _vote(db_session, 1, 2, [104, 103, 102])
    election["president"].open = False
    db_session.commit()

    results = compute_results(TIE_BREAK_ID)

    assert [w.candidate_id for w in results[0].winners] == [101]
    elected = {c.warwick_id for c in Candidate.query.filter_by(elected=True)}
    assert elected == {101}


def test_compute_results_is_idempotent(db_session, election):
    _vote(db_session, 1, 1, [102, 101, 103])
    election["president"].open = False
    db_session.commit()

    first = compute_results(TIE_BREAK_ID)
    second = compute_results(TIE_BREAK_ID)

    assert first == second
    elected = {c.warwick_id for c in Candidate.query.filter_by(elected=True)}
    assert elected == {102}


def test_reopening_a_position_clears_its_winners(db_session, election):
    _vote(db_session, 1, 1, [103, 101, 102])
    election["president"].open = False
    db_session.commit()
    compute_results(TIE_BREAK_ID)

    election["president"].open = True
    db_session.commit()
    compute_results(TIE_BREAK_ID)

    assert Candidate.query.filter_by(elected=True).count() == 0


def test_failed_elected_update_keeps_the_previous_flags(
    db_session, election, monkeypatch
):
    set_elected([101])

    def failing_commit():
        raise SQLAlchemyError("database went away")

    monkeypatch.setattr(db.session, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        set_elected([102, 103])
    monkeypatch.undo()

    db_session.expire_all()
    elected = {c.warwick_id for c in Candidate.query.filter_by(elected=True)}
    assert elected == {101}
