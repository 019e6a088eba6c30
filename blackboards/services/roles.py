from enum import Enum
from functools import wraps

from flask import abort, current_app
from flask_login import UserMixin, current_user, login_required


class Role(Enum):
    ELECTION_ADMIN = "ELECTION_ADMINS"
    MEMBER = "BARBELL_MEMBERS"
    SESSION_ADMIN = "SESSION_ADMINS"


def _configured_ids(value):
    if not value:
        return set()
    if isinstance(value, str):
        value = value.split(",")

    ids = set()
    for item in value:
        try:
            ids.add(int(str(item).strip()))
        except ValueError:
            current_app.logger.warning("Ignoring malformed id in role config: %r", item)
    return ids


def has_role(user_id, role):
    return user_id in _configured_ids(current_app.config.get(role.value))


def roles_for(user_id):
    return frozenset(role for role in Role if has_role(user_id, role))


class Member(UserMixin):
    """A signed-in club member, identified by their Warwick ID."""

    def __init__(self, member_id, name, roles=frozenset()):
        self.id = member_id
        self.name = name
        self.roles = frozenset(roles)

    @classmethod
    def load(cls, member_id, name):
        return cls(member_id, name, roles_for(member_id))

    def has_role(self, role):
        return role in self.roles


def role_required(role):
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapped(*args, **kwargs):
            if not current_user.has_role(role):
                abort(403)
            return view(*args, **kwargs)

        return wrapped

    return decorator
