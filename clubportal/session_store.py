# clubportal/session_store.py

import logging
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)

PROFILE_KEY = 'user'


@dataclass(frozen=True)
class SessionProfile:
    """The signed-in user as the portal sees them for the rest of the session."""

    uid: str
    email: str
    username: str
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(uid=user['uid'], email=user['email'], username=user['username'], role=user['role'])

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return None
        try:
            return cls(uid=data['uid'], email=data['email'], username=data['username'], role=data['role'])
        except KeyError:
            return None

    def to_dict(self):
        return asdict(self)


class SessionStore:
    """
    Caches the signed-in profile in per-browser storage (the Flask session).
    No expiry or refresh: the cached profile is trusted until sign-out.
    """

    def __init__(self, storage):
        self._storage = storage

    def set(self, profile):
        self._storage[PROFILE_KEY] = profile.to_dict()

    def get(self):
        profile = SessionProfile.from_dict(self._storage.get(PROFILE_KEY))
        if profile is None and PROFILE_KEY in self._storage:
            logger.warning("Discarding malformed cached profile")
        return profile

    def clear(self):
        self._storage.pop(PROFILE_KEY, None)
