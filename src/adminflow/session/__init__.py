"""Session handling: the current actor, kept outside the store."""

from adminflow.session.holder import SessionHolder, session_token

__all__ = [
    "SessionHolder",
    "session_token",
]
