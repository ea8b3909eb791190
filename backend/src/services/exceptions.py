"""Shared exceptions for service layer operations."""


class MovieNotFoundError(Exception):
    """
    Raised when a referenced movie id does not exist.

    A missing movie and a malformed id are reported identically ("Invalid ID").
    """

    def __init__(self, movie_id: str | None = None) -> None:
        self.movie_id = movie_id
        super().__init__("Invalid ID")


class EmailTakenError(Exception):
    """Raised when registering an email that already belongs to a user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email taken")


class InvalidCredentialsError(Exception):
    """Raised when a credentials sign-in attempt fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
