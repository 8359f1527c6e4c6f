"""User-facing rejections raised by the session coordinator.

None of these are fatal. The socket layer reports them to the originating
connection as a ``sessionError`` event and the session is left untouched.
"""


class SessionError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotAuthorized(SessionError):
    """Caller is not allowed to perform this action."""


class InvalidSessionState(SessionError):
    """Action does not fit the current round state."""


class CapacityUnmet(SessionError):
    """Not enough players to start a round."""


class InvalidPayload(SessionError):
    """Event payload is missing a field or has the wrong type."""
