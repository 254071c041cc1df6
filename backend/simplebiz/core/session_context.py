"""
Explicit request identity.

A ``SessionContext`` starts UNINITIALIZED and is initialized exactly once,
either with the signed-in profile or as anonymous. It is passed to whatever
needs identity instead of being read from global state.
"""
from enum import Enum as PyEnum

from simplebiz.core.exceptions import UnauthorizedError
from simplebiz.models.profile import Profile


class SessionState(str, PyEnum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class SessionContext:
    """Identity of the caller: a profile, anonymous, or not yet known."""

    def __init__(self):
        self.state = SessionState.UNINITIALIZED
        self._profile: Profile | None = None

    @classmethod
    def anonymous(cls) -> "SessionContext":
        context = cls()
        context.initialize(None)
        return context

    @classmethod
    def for_profile(cls, profile: Profile) -> "SessionContext":
        context = cls()
        context.initialize(profile)
        return context

    def initialize(self, profile: Profile | None) -> None:
        if self.state is SessionState.READY:
            raise RuntimeError("Session context is already initialized")
        self._profile = profile
        self.state = SessionState.READY

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    @property
    def is_authenticated(self) -> bool:
        return self.is_ready and self._profile is not None

    @property
    def profile(self) -> Profile | None:
        if not self.is_ready:
            raise RuntimeError("Session context used before initialization")
        return self._profile

    def require_profile(self) -> Profile:
        profile = self.profile
        if profile is None:
            raise UnauthorizedError("Not authenticated")
        return profile

    def __repr__(self) -> str:
        if not self.is_ready:
            return "<SessionContext uninitialized>"
        who = self._profile.email if self._profile else "anonymous"
        return f"<SessionContext ready({who})>"
