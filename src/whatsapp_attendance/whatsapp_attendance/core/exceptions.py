from __future__ import annotations

from .enums import CommandKind, PresenceStatus


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an entity addressed by id does not exist."""


class UnknownSenderError(DomainError):
    """Raised when a handle matches no active employee."""

    def __init__(self, handle: str):
        super().__init__(f"No active employee for handle {handle!r}")
        self.handle = handle


class UnrecognizedCommandError(DomainError):
    """Raised when message text matches none of the command tokens."""

    def __init__(self, raw_text: str):
        super().__init__(f"Unrecognized command {raw_text!r}")
        self.raw_text = raw_text


class InvalidTransitionError(DomainError):
    """Raised when a command is not allowed from the employee's current status."""

    def __init__(self, command: CommandKind, status: PresenceStatus):
        super().__init__(f"{command.value} not allowed while {status.value}")
        self.command = command
        self.status = status


class StorageError(Exception):
    """Raised when the database is unreachable, a write fails or a row is malformed.

    Not a DomainError: callers must not recover from it locally.
    """


class DeliveryError(Exception):
    """Raised when a reply could not be delivered to the messaging provider."""
