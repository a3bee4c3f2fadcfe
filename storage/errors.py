"""Exceptions raised by storage backends."""


class StorageError(Exception):
    """Base class for storage failures callers are expected to handle."""


class DuplicateEmailError(StorageError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(f"A user with email {email!r} already exists.")
        self.email = email
