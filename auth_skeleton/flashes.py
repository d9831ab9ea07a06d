"""One-shot notice/alert messages kept in the session until the next render.

Messages live in Flask's own flash storage (``session['_flashes']``), but
unlike ``get_flashed_messages`` each kind holds at most one message and
reading one removes only that kind.
"""

from flask import flash, session

NOTICE = 'notice'
ALERT = 'alert'
KINDS = (NOTICE, ALERT)


def set_flash(kind, message):
    """Store ``message`` for ``kind``, replacing anything still pending for it."""
    if kind not in KINDS:
        raise ValueError(f'unknown flash kind: {kind!r}')
    session['_flashes'] = [entry for entry in session.get('_flashes', []) if entry[0] != kind]
    flash(message, kind)


def consume_flash(kind):
    """Return the pending message for ``kind`` (or None) and clear it."""
    pending = session.get('_flashes')
    if not pending:
        return None
    messages = [message for category, message in pending if category == kind]
    if not messages:
        return None
    remaining = [entry for entry in pending if entry[0] != kind]
    if remaining:
        session['_flashes'] = remaining
    else:
        session.pop('_flashes')
    return messages[-1]


def inject_flashes():
    # context processor: pending messages are shown on the page being rendered
    return {
        'flash_notice': consume_flash(NOTICE),
        'flash_alert': consume_flash(ALERT),
    }
