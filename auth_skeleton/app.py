import logging

from flask import Flask, g, render_template, request
from flask.logging import default_handler, has_level_handler
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import DEFAULT_SECRET_KEY, load_config
from .errors import UserNotFound
from .flashes import inject_flashes
from .guards import load_current_user
from .middleware import MethodOverrideMiddleware
from .models import db
from .store import UserStore
from .users import users_bp


def configure_logging(app):
    # must run before app.logger is first touched, so flask does not attach
    # a second handler to it
    level = getattr(logging, app.config['LOG_LEVEL'], logging.INFO)
    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    if not has_level_handler(package_logger):
        package_logger.addHandler(default_handler)


def create_app(config=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(load_config(config))
    configure_logging(app)

    if app.config['SECRET_KEY'] == DEFAULT_SECRET_KEY and not app.testing:
        app.logger.warning('SESSION_SECRET is not set; using the insecure default key')

    db.init_app(app)
    UserStore(db, hash_method=app.config['PASSWORD_HASH_METHOD']).init_app(app)
    with app.app_context():
        db.create_all()

    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)
    app.before_request(load_current_user)
    app.context_processor(inject_flashes)

    @app.context_processor
    def inject_current_user():
        return {'current_user': g.get('user')}

    @app.after_request
    def log_request(response):
        app.logger.info('%s %s %s', request.method, request.path, response.status_code)
        return response

    # ---------------- Routes ----------------
    @app.route('/')
    def index():
        return render_template('index.html', title='Home')

    app.register_blueprint(users_bp)

    # ---------------- Errors ----------------
    def render_error(status, message, error=None):
        detail = error if app.debug else None
        return render_template('error.html', title='Error', status=status,
                               message=message, error=detail), status

    @app.errorhandler(UserNotFound)
    def user_not_found(e):
        return render_error(404, 'User not found', e)

    @app.errorhandler(HTTPException)
    def http_error(e):
        message = 'Page Not Found' if e.code == 404 else e.name
        return render_error(e.code, message, e)

    @app.errorhandler(SQLAlchemyError)
    def storage_error(e):
        db.session.rollback()
        app.logger.exception('storage failure on %s %s', request.method, request.path)
        return render_error(500, 'Something went wrong', e)

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception('unhandled error on %s %s', request.method, request.path)
        return render_error(500, 'Something went wrong', e)

    return app
