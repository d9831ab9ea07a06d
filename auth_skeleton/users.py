import logging

from flask import Blueprint, g, redirect, render_template, request, session, url_for

from .errors import DuplicateUsername, ValidationFailure
from .flashes import ALERT, NOTICE, set_flash
from .guards import login_required, owner_required
from .store import get_store

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__, url_prefix='/users')

BAD_CREDENTIALS = 'Incorrect username/password'
USERNAME_TAKEN = 'Username not available'
PASSWORDS_MISMATCH = 'Passwords must match'


@users_bp.errorhandler(ValidationFailure)
def handle_validation_failure(error):
    set_flash(ALERT, error.message)
    return redirect(error.redirect_to or request.referrer or url_for('index'))


def _form_value(name, strip=False):
    value = request.form.get(name) or ''
    return value.strip() if strip else value


# ---------------- Session ----------------
@users_bp.route('/login', methods=['GET'])
def login_form():
    return render_template('users/login.html', title='Login')


@users_bp.route('/login', methods=['POST'])
def login():
    username = _form_value('username', strip=True)
    password = _form_value('password')
    store = get_store()
    user = store.find_by_username(username) if username else None
    # unknown user and wrong password must look the same to the client
    if not store.verify_password(user, password):
        logger.warning('failed login for username %r', username)
        raise ValidationFailure(BAD_CREDENTIALS, url_for('users.login'))
    session.clear()
    session['user_id'] = user.id
    logger.info('user %s logged in', user.id)
    set_flash(NOTICE, 'Successfully logged in')
    return redirect(url_for('index'))


@users_bp.route('/logout')
def logout():
    if g.get('user') is not None:
        logger.info('user %s logged out', g.user.id)
    session.clear()
    return redirect(url_for('index'))


# ---------------- Users ----------------
@users_bp.route('', methods=['GET'])
@login_required
def index():
    return render_template('users/index.html', title='Users', users=get_store().all())


@users_bp.route('/new', methods=['GET'])
def new():
    return render_template('users/new.html', title='Create User')


@users_bp.route('/new', methods=['POST'])
def create():
    username = _form_value('username', strip=True)
    password = _form_value('password')
    confirmation = _form_value('confirmation')
    form_url = url_for('users.new')
    store = get_store()

    if not username or not password:
        raise ValidationFailure('Username and password are required', form_url)
    if store.find_by_username(username) is not None:
        raise ValidationFailure(USERNAME_TAKEN, form_url)
    if password != confirmation:
        raise ValidationFailure(PASSWORDS_MISMATCH, form_url)

    try:
        store.create(username, password)
    except DuplicateUsername:
        raise ValidationFailure(USERNAME_TAKEN, form_url)

    set_flash(NOTICE, 'Successfully created user')
    return redirect(url_for('index'))


@users_bp.route('/<user_id>', methods=['GET'])
@login_required
def show(user_id):
    user = get_store().find_by_id(user_id)
    return render_template('users/show.html', title=f'User {user.id}', user=user)


@users_bp.route('/<user_id>/edit', methods=['GET'])
@owner_required
def edit(user_id):
    user = get_store().find_by_id(user_id)
    return render_template('users/edit.html', title=f'Edit User {user.id}', user=user)


@users_bp.route('/<user_id>/edit', methods=['PUT'])
@owner_required
def update(user_id):
    # only these fields are ever read from the body
    username = _form_value('username', strip=True)
    password = _form_value('password')
    confirmation = _form_value('confirmation')
    edit_url = url_for('users.edit', user_id=user_id)
    store = get_store()
    user = store.find_by_id(user_id)

    if not username:
        raise ValidationFailure('Username is required', edit_url)
    taken_by = store.find_by_username(username)
    if taken_by is not None and taken_by.id != user.id:
        raise ValidationFailure(USERNAME_TAKEN, request.referrer or edit_url)
    if password != confirmation:
        raise ValidationFailure(PASSWORDS_MISMATCH, edit_url)

    try:
        store.update(user.id, username=username, password=password or None)
    except DuplicateUsername:
        raise ValidationFailure(USERNAME_TAKEN, request.referrer or edit_url)

    set_flash(NOTICE, 'Successfully updated user')
    return redirect(url_for('users.show', user_id=user.id))


@users_bp.route('/<user_id>', methods=['DELETE'])
@owner_required
def destroy(user_id):
    get_store().delete(user_id)
    # keep the rest of the session so the notice survives the redirect
    session.pop('user_id', None)
    set_flash(NOTICE, 'Successfully deleted user')
    return redirect(url_for('index'))
