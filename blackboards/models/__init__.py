from blackboards.models.attendance import Attendance
from blackboards.models.candidate import Candidate
from blackboards.models.exec_position import ExecPosition
from blackboards.models.nomination import Nomination
from blackboards.models.personal_best import PersonalBest
from blackboards.models.registration import Registration
from blackboards.models.training_session import TrainingSession
from blackboards.models.vote import Vote

__all__ = [
    "Attendance",
    "Candidate",
    "ExecPosition",
    "Nomination",
    "PersonalBest",
    "Registration",
    "TrainingSession",
    "Vote",
]
