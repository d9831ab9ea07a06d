"""Named outcomes raised by the credential store and the user flows."""


class AuthError(Exception):
    """Base class for expected failures that handlers branch on."""


class DuplicateUsername(AuthError):
    def __init__(self, username):
        super().__init__(f'username {username!r} is already taken')
        self.username = username


class UserNotFound(AuthError):
    def __init__(self, user_id):
        super().__init__(f'no user with id {user_id!r}')
        self.user_id = user_id


class ValidationFailure(AuthError):
    """Form input that cannot be applied; the message is shown to the user."""

    def __init__(self, message, redirect_to=None):
        super().__init__(message)
        self.message = message
        self.redirect_to = redirect_to
