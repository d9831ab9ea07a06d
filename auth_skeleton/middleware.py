"""
middleware.py
-------------
HTML forms can only submit GET and POST. Edit and delete forms carry a hidden
``_method`` field instead; this WSGI middleware reads it and rewrites the
request method before Flask routes the request.
"""

import io
from urllib.parse import parse_qsl

from werkzeug.http import parse_options_header
from werkzeug.wsgi import get_input_stream

ALLOWED_OVERRIDES = frozenset(['PUT', 'DELETE'])
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class MethodOverrideMiddleware:

    def __init__(self, app, field='_method'):
        self.app = app
        self.field = field

    def __call__(self, environ, start_response):
        if environ.get('REQUEST_METHOD', '').upper() == 'POST' and self._is_form(environ):
            # handles Content-Length and chunked (wsgi.input_terminated) bodies
            body = get_input_stream(environ).read()
            if body:
                fields = dict(parse_qsl(body.decode('latin-1'), keep_blank_values=True))
                method = fields.get(self.field, '').upper()
                if method in ALLOWED_OVERRIDES:
                    environ['REQUEST_METHOD'] = method
                # replay the consumed body so the app still sees every field
                environ['wsgi.input'] = io.BytesIO(body)
                environ['CONTENT_LENGTH'] = str(len(body))
        return self.app(environ, start_response)

    @staticmethod
    def _is_form(environ):
        mimetype, _ = parse_options_header(environ.get('CONTENT_TYPE', ''))
        return mimetype.lower() == FORM_CONTENT_TYPE
