class ElectionError(Exception):
    pass


class BallotValidationError(ElectionError):
    pass


class VotingClosedError(BallotValidationError):
    pass


class PositionNotFoundError(ElectionError):
    pass


class TieBreakBallotMissingError(ElectionError):
    pass


class TallyError(ElectionError):
    pass
