import uuid

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _new_id():
    return uuid.uuid4().hex


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    # salted werkzeug hash, e.g. "scrypt:32768:8:1$<salt>$<hex>"
    password_hash = db.Column(db.String(255), nullable=False)

    def __repr__(self):
        return f'<User {self.username}>'
