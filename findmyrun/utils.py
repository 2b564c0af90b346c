from urllib.parse import urlencode

from flask import current_app, redirect, request

from .errors import ValidationError


def result_redirect(path, **params):
    """
    Redirect to a page on the public site, e.g.
    ``result_redirect('/claim/error', reason='claim_not_found')``.

    None-valued params are left out.
    """
    url = current_app.config['APP_URL'] + path
    query = {key: value for key, value in params.items() if value is not None}
    if query:
        url += '?' + urlencode(query)
    return redirect(url)


def parse_int(value):
    """int(value), or None for anything that is not an integer."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def json_body():
    """The request's JSON object; an empty dict when there is no body."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError('Invalid request body')
    return body
