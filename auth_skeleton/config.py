"""
Application configuration
Settings are read from the environment when the app is created; any mapping
passed to create_app() is applied on top.
"""

import os

# Insecure fallback for local development only
DEFAULT_SECRET_KEY = 'secret'
DEFAULT_DATABASE_URL = 'sqlite:///users.db'
DEFAULT_PORT = 1337


def load_config(overrides=None):
    config = {
        'SECRET_KEY': os.getenv('SESSION_SECRET', DEFAULT_SECRET_KEY),
        'SQLALCHEMY_DATABASE_URI': os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL),
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'PASSWORD_HASH_METHOD': os.getenv('PASSWORD_HASH_METHOD', 'scrypt'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO').upper(),
        'PORT': int(os.getenv('PORT', DEFAULT_PORT)),
    }
    if overrides:
        config.update(overrides)
    return config
