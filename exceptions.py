"""
Exception classes for the signaling server.
"""


class SignalingError(Exception):
    """Base exception for the signaling server."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{super().__str__()} - {self.details}"
        return super().__str__()


class MalformedMessageError(SignalingError):
    """Raised when an inbound frame cannot be decoded or validated."""
    pass


class AlreadyInRoomError(SignalingError):
    """Raised when a connection that already occupies a room tries to join another."""
    pass
