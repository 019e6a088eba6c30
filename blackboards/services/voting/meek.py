"""Multi-winner ranked-choice counting using Meek's method.

Ballots are lists of candidate identifiers, most preferred first. Every
continuing candidate has a keep factor: the share of each vote reaching them
that they retain, passing the rest down the ballot. Hopeful candidates keep
everything, excluded candidates keep nothing, and elected candidates have
their keep factor lowered until they hold exactly a quota.

The quota is recomputed on every pass as the active (non-exhausted) vote
divided by ``num_winners + 1``. All arithmetic is done with ``Decimal`` at
``PRECISION`` significant digits, and two values closer than ``EPSILON`` are
treated as equal, both for convergence and for detecting ties.
"""

from decimal import Decimal, localcontext

from blackboards.services.voting.errors import TallyError

PRECISION = 50
EPSILON = Decimal("1e-12")
MAX_ITERATIONS = 1000


def _distribute_votes(ballots, keep_factors, continuing):
    totals = {cid: Decimal(0) for cid in continuing}

    for ballot in ballots:
        weight = Decimal(1)
        for cid in ballot:
            if cid not in continuing:
                continue

            portion = weight * keep_factors[cid]
            totals[cid] += portion
            weight -= portion
            if weight <= 0:
                break

    return totals


def _quota(totals, num_winners):
    active = sum((totals[cid] for cid in sorted(totals)), Decimal(0))
    return active / Decimal(num_winners + 1)


def _converge(ballots, keep_factors, continuing, elected, num_winners):
    for _ in range(MAX_ITERATIONS):
        totals = _distribute_votes(ballots, keep_factors, continuing)
        quota = _quota(totals, num_winners)

        converged = True
        for cid in sorted(elected):
            if totals[cid] <= 0:
                continue

            new_keep = min(keep_factors[cid] * quota / totals[cid], Decimal(1))
            if abs(new_keep - keep_factors[cid]) >= EPSILON:
                converged = False
            keep_factors[cid] = new_keep

        if converged:
            return totals, quota

    raise TallyError(f"Vote transfers did not settle within {MAX_ITERATIONS} iterations")


def _tiers(candidate_ids, totals):
    # Highest vote first; candidates within EPSILON of the tier's head share it.
    ordered = sorted(candidate_ids, key=lambda cid: (-totals[cid], cid))

    tiers = []
    for cid in ordered:
        if tiers and totals[tiers[-1][0]] - totals[cid] <= EPSILON:
            tiers[-1].append(cid)
        else:
            tiers.append([cid])

    return [sorted(tier) for tier in tiers]


def tally(ballots, num_winners):
    """Count ``ballots`` for ``num_winners`` seats.

    Returns ``(candidate_id, rank)`` pairs for every candidate appearing on
    any ballot. Rank 0 is the first tier elected; elected tiers come in the
    order they were elected, then candidates still hopeful once the seats
    were filled, then excluded candidates, the last exclusion first.
    Candidates resolved in the same step with equal votes share a rank.
    """
    if num_winners < 1:
        raise ValueError("num_winners must be positive")

    ballots = [list(ballot) for ballot in ballots if ballot]
    candidates = sorted({cid for ballot in ballots for cid in ballot})
    if not candidates:
        return []

    with localcontext() as ctx:
        ctx.prec = PRECISION

        keep_factors = {cid: Decimal(1) for cid in candidates}
        continuing = set(candidates)
        elected = set()
        elected_tiers = []
        excluded_tiers = []

        while len(elected) < num_winners:
            hopeful = continuing - elected
            if not hopeful:
                break

            totals, quota = _converge(
                ballots, keep_factors, continuing, elected, num_winners
            )
            seats_left = num_winners - len(elected)

            if len(hopeful) <= seats_left:
                newly_elected = hopeful
            else:
                newly_elected = {
                    cid for cid in hopeful if totals[cid] >= quota - EPSILON
                }

            if not newly_elected:
                lowest = min(totals[cid] for cid in hopeful)
                losers = {cid for cid in hopeful if totals[cid] - lowest <= EPSILON}

                if len(hopeful) - len(losers) >= seats_left:
                    excluded_tiers.append(sorted(losers))
                    continuing -= losers
                    for cid in losers:
                        keep_factors[cid] = Decimal(0)
                    continue

                # Excluding the whole tie would leave seats empty, so the tie
                # is carried into the elected tiers for the caller to break.
                newly_elected = hopeful

            elected_tiers.extend(_tiers(newly_elected, totals))
            elected |= newly_elected

        remaining_tiers = []
        unresolved = continuing - elected
        if unresolved:
            totals, _ = _converge(
                ballots, keep_factors, continuing, elected, num_winners
            )
            remaining_tiers = _tiers(unresolved, totals)

    ranked = []
    tiers = elected_tiers + remaining_tiers + excluded_tiers[::-1]
    for rank, tier in enumerate(tiers):
        ranked.extend((cid, rank) for cid in tier)

    return ranked


def cutoff_rank(ranked, num_winners):
    """Rank of the ``num_winners``-th entry, or ``None`` when there are fewer."""
    if len(ranked) < num_winners:
        return None
    return ranked[num_winners - 1][1]
