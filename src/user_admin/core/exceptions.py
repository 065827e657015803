"""
Custom exceptions for the user admin application.
"""


class UserAdminError(Exception):
    """Base class for exceptions raised by the application."""
    pass


class InvalidUserIdError(UserAdminError, ValueError):
    """Raised when a user id taken from the request matches no stored user."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Invalid user Id:{user_id}")
