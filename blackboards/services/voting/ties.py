def group_by_rank(winners):
    groups = {}
    for entry in winners:
        groups.setdefault(entry[2], []).append(entry)

    return [groups[rank] for rank in sorted(groups)]


def resolve_ties(winners, num_winners, tie_break_ballot):
    """Narrow ``winners`` down to ``num_winners`` using a tie-break ballot.

    ``winners`` holds ``(candidate_id, name, rank)`` entries. Whole rank
    groups are taken while they fit in the seats left; a group too large for
    the seats left is narrowed by walking ``tie_break_ballot`` in preference
    order. Tied candidates missing from the tie-break ballot are never
    selected, so a seat can stay empty.
    """
    selected = []

    for group in group_by_rank(winners):
        remaining = num_winners - len(selected)
        if remaining == 0:
            break

        if len(group) <= remaining:
            selected.extend(group)
            continue

        tied = list(group)
        for candidate_id in tie_break_ballot:
            if len(selected) == num_winners:
                break

            match = next((entry for entry in tied if entry[0] == candidate_id), None)
            if match is not None:
                selected.append(match)
                tied.remove(match)

    return selected
