"""
store.py
--------
Credential store for user records. Wraps the Flask-SQLAlchemy session with
the lookups and mutations the user flows need, and owns password hashing so
plaintext never reaches the database.
"""

import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from .errors import DuplicateUsername, UserNotFound
from .models import User

logger = logging.getLogger(__name__)

DEFAULT_HASH_METHOD = 'scrypt'
DEFAULT_SALT_LENGTH = 16


class UserStore:
    """Create, look up, update and delete users. Every read hits the database."""

    def __init__(self, db, hash_method=DEFAULT_HASH_METHOD, salt_length=DEFAULT_SALT_LENGTH):
        self.db = db
        self.hash_method = hash_method
        self.salt_length = salt_length
        # compared against when there is no real hash, so a miss costs as much as a hit
        self._dummy_hash = self.hash_password('unused-dummy-password')

    def init_app(self, app):
        app.extensions['user_store'] = self

    # ---------------- Hashing ----------------
    def hash_password(self, password):
        # werkzeug draws a fresh random salt on every call
        return generate_password_hash(password, method=self.hash_method, salt_length=self.salt_length)

    def verify_password(self, user, candidate):
        """Check ``candidate`` against the stored hash using the salt embedded in it."""
        if user is None or not candidate:
            check_password_hash(self._dummy_hash, candidate or '')
            return False
        return check_password_hash(user.password_hash, candidate)

    # ---------------- Reads ----------------
    def find_by_username(self, username):
        return User.query.filter_by(username=username).first()

    def get(self, user_id):
        if not user_id:
            return None
        return self.db.session.get(User, user_id)

    def find_by_id(self, user_id):
        user = self.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def all(self):
        return User.query.order_by(User.username).all()

    # ---------------- Writes ----------------
    def create(self, username, password):
        if self.find_by_username(username) is not None:
            raise DuplicateUsername(username)
        user = User(username=username, password_hash=self.hash_password(password))
        self.db.session.add(user)
        self._commit(username)
        logger.info('created user %s', user.id)
        return user

    def update(self, user_id, username=None, password=None):
        """Apply the allow-listed fields. An empty password keeps the current hash."""
        user = self.find_by_id(user_id)
        if username and username != user.username:
            other = self.find_by_username(username)
            if other is not None and other.id != user.id:
                raise DuplicateUsername(username)
            user.username = username
        if password:
            user.password_hash = self.hash_password(password)
        self._commit(user.username)
        logger.info('updated user %s', user.id)
        return user

    def delete(self, user_id):
        user = self.find_by_id(user_id)
        self.db.session.delete(user)
        self._commit(user.username)
        logger.info('deleted user %s', user_id)

    def _commit(self, username):
        try:
            self.db.session.commit()
        except IntegrityError:
            # unique index on username lost a race with a concurrent writer
            self.db.session.rollback()
            raise DuplicateUsername(username)
        except SQLAlchemyError:
            self.db.session.rollback()
            raise


def get_store():
    return current_app.extensions['user_store']
