from functools import wraps

from flask import g, redirect, request, session, url_for

from .flashes import ALERT, set_flash
from .store import get_store

LOGIN_REQUIRED_MESSAGE = 'You need to log in to continue'
UNAUTHORIZED_MESSAGE = 'You are unauthorized to make that request'


def load_current_user():
    """Resolve the session's user id to a User for this request.

    An id whose record no longer exists is dropped, so the visitor is
    treated as logged out rather than erroring later.
    """
    user_id = session.get('user_id')
    g.user = get_store().get(user_id) if user_id else None
    if user_id and g.user is None:
        session.pop('user_id', None)


def redirect_back(default='index'):
    return redirect(request.referrer or url_for(default))


def login_required(view):
    """Decorator for route handlers that require an authenticated user."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get('user') is None:
            set_flash(ALERT, LOGIN_REQUIRED_MESSAGE)
            return redirect(url_for('users.login'))
        return view(*args, **kwargs)
    return wrapped


def owner_required(view):
    """Decorator allowing the request only when the session user owns ``user_id``."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if session.get('user_id') is None or session.get('user_id') != kwargs.get('user_id'):
            set_flash(ALERT, UNAUTHORIZED_MESSAGE)
            return redirect_back()
        return view(*args, **kwargs)
    return wrapped
